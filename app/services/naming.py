"""
Display name resolution for fixture records

Every place that derives a label for an airport, city or airline goes through
``first_present`` so the English -> Chinese -> code fallback order is applied
the same way everywhere.
"""

from typing import Dict, Optional

from .data_loader import is_missing


def first_present(*values, default=None):
    """Return the first value that is not None, NaN or an empty string"""
    for value in values:
        if is_missing(value) or value == '':
            continue
        return value
    return default


def airport_name(airport: Optional[Dict], fallback=None):
    """English name, then Chinese name, then ``fallback``"""
    airport = airport or {}
    return first_present(airport.get('airport_name_en'), airport.get('airport_name_zh'), default=fallback)


def airport_city(airport: Optional[Dict], fallback=None):
    airport = airport or {}
    return first_present(airport.get('city_zh'), default=fallback)


def airline_name(airline: Optional[Dict], fallback=None):
    """English name, then Chinese name, then ``fallback``"""
    airline = airline or {}
    return first_present(airline.get('airline_name_en'), airline.get('airline_name_zh'), default=fallback)
