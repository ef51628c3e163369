import re
from typing import Dict, List, Optional

import pandas as pd

from config import Config
from .data_loader import DataLoader, composite_score, to_records
from .errors import AirportNotFoundError, RouteNotFoundError
from .naming import airline_name, airport_city, airport_name, first_present

SORT_KEYS = ('safety_score', 'comfort_score', 'flight_count', 'composite_score')
DEFAULT_SORT_KEY = 'composite_score'

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]

_AIRPORT_CODE = re.compile(r'^[A-Z]{3}$')
_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')


def parse_int(value) -> Optional[int]:
    """
    Parse the leading integer of a query value

    "12" -> 12, "12abc" -> 12, "abc" -> None, None -> None
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else None


def index_by(records: List[Dict], key: str) -> Dict:
    """Map ``key`` to the first record carrying it"""
    index = {}
    for record in records:
        index.setdefault(record.get(key), record)
    return index


def overlay_monthly(summary: Dict, monthly: Optional[Dict]) -> Dict:
    """
    Merge a monthly route row onto its summary row

    Monthly fields take precedence; fields the monthly row lacks keep their
    summary values.
    """
    if monthly is None:
        return summary
    merged = dict(summary)
    merged.update(monthly)
    return merged


def on_time_mask(delays: pd.Series) -> pd.Series:
    """A flight is on time when its delay is unset or within the threshold"""
    return delays.isna() | (delays <= Config.ON_TIME_THRESHOLD_MINUTES)


def on_time_rate(delays: pd.Series) -> float:
    """Percentage of on-time flights rounded to one decimal, 0 when empty"""
    if delays.empty:
        return 0.0
    return round(float(on_time_mask(delays).mean()) * 100, 1)


def average_delay(delays: pd.Series) -> float:
    """Mean delay treating unset delays as zero, 0 when empty"""
    if delays.empty:
        return 0.0
    return float(delays.fillna(0).mean())


def _mean(series: pd.Series) -> float:
    value = series.mean() if not series.empty else None
    return 0.0 if value is None or pd.isna(value) else float(value)


def _sort_value(value) -> float:
    if value is None or pd.isna(value):
        return float('-inf')
    return float(value)


class RouteAnalyzer:
    """Read-only queries and aggregations over the route fixtures"""

    def __init__(self, data_loader: DataLoader):
        """
        Initialize route analyzer

        Args:
            data_loader: DataLoader used to read fixtures on every query
        """
        self.data_loader = data_loader

    def get_destinations(self) -> List[Dict]:
        """
        List airports that appear as a route destination

        Names are compared case-insensitively with ``str.casefold`` rather
        than through the process locale, so the order does not depend on
        the host's LC_COLLATE setting.

        Returns:
            List of {code, name, city} sorted by display name
        """
        routes = self.data_loader.load_routes()
        airports = self.data_loader.load_airports()

        active_codes = set(routes['destination_code'].dropna())
        seen = set()
        destinations = []

        for airport in to_records(airports):
            code = airport.get('airport_code')
            if code not in active_codes or code in seen:
                continue
            seen.add(code)
            destinations.append({
                'code': code,
                'name': airport_name(airport, fallback=code),
                'city': airport_city(airport, fallback=code)
            })

        destinations.sort(key=lambda d: (str(d['name']).casefold(), str(d['name'])))
        return destinations

    def get_airlines(self) -> List[Dict]:
        """All airline records with a resolved ``airline_name``"""
        airlines = to_records(self.data_loader.load_airlines())
        return [
            {**airline, 'airline_name': airline_name(airline, fallback=airline.get('airline_code'))}
            for airline in airlines
        ]

    def get_popular_destinations(self) -> List[Dict]:
        """
        Aggregate routes per destination, busiest first

        Returns:
            List of destination aggregates with flight/airline counts,
            average scores and the composite of those averages
        """
        routes = self.data_loader.load_routes()
        routes = routes[routes['destination_code'].notna()]
        if routes.empty:
            return []

        grouped = routes.groupby('destination_code', sort=False).agg(
            flight_count=('flight_count', 'sum'),
            airline_count=('airline_code', 'size'),
            avg_safety_score=('safety_score', 'mean'),
            avg_comfort_score=('comfort_score', 'mean')
        )
        grouped['composite_score'] = composite_score(
            grouped['avg_safety_score'], grouped['avg_comfort_score']
        )
        grouped = grouped.sort_values('flight_count', ascending=False, kind='mergesort')
        grouped = grouped.reset_index().rename(columns={'destination_code': 'code'})

        airports = index_by(to_records(self.data_loader.load_airports()), 'airport_code')

        destinations = []
        for dest in to_records(grouped):
            code = dest['code']
            airport = airports.get(code)
            dest['flight_count'] = int(dest.get('flight_count', 0))
            dest['airport_name'] = airport_name(airport, fallback=code) if airport else code
            dest['city'] = airport_city(airport, fallback=code) if airport else code
            destinations.append(dest)

        return destinations

    def resolve_destination(self, destination: Optional[str], airports: List[Dict]) -> Optional[str]:
        """
        Turn a destination query into an airport code

        A three letter upper-case value is taken as a code. Anything else is
        matched against city (exact) and airport names (case-insensitive
        substring); the first matching airport wins. Without a match the raw
        value is used as the code.
        """
        if not destination or _AIRPORT_CODE.match(destination):
            return destination or None

        needle = destination.lower()
        for airport in airports:
            if airport.get('city_zh') == destination:
                return airport.get('airport_code')
            names = (airport.get('airport_name_en'), airport.get('airport_name_zh'))
            if any(isinstance(name, str) and needle in name.lower() for name in names):
                return airport.get('airport_code')

        return destination

    def search_routes(
        self,
        destination: Optional[str] = None,
        month=None,
        sort: str = DEFAULT_SORT_KEY,
        limit=Config.DEFAULT_ROUTE_LIMIT
    ) -> List[Dict]:
        """
        Search route summaries

        Args:
            destination: Airport code or a city/airport name fragment
            month: Month number; overlays that month's scores onto the summaries
            sort: One of SORT_KEYS, anything else sorts by composite_score
            limit: Maximum number of rows, parsed leniently

        Returns:
            Route rows sorted descending by ``sort`` and enriched with
            airport/airline display names
        """
        routes = self.data_loader.load_routes()
        airports = to_records(self.data_loader.load_airports())

        destination_code = self.resolve_destination(destination, airports)
        if destination_code:
            routes = routes[routes['destination_code'] == destination_code]

        rows = to_records(routes)

        if month is not None and month != '':
            rows = self._overlay_month(rows, parse_int(month), destination_code)

        sort_key = sort if sort in SORT_KEYS else DEFAULT_SORT_KEY
        rows.sort(key=lambda r: _sort_value(r.get(sort_key)), reverse=True)

        row_limit = parse_int(limit)
        rows = rows[:row_limit] if row_limit is not None else []

        airport_index = index_by(airports, 'airport_code')
        enriched = []
        for route in rows:
            airport = airport_index.get(route.get('destination_code'))
            enriched.append({
                **route,
                'city_name': first_present(airport_city(airport), route.get('city_zh')),
                'airport_name': airport_name(airport, fallback=route.get('destination_name')),
                'airline_name': airline_name(route)
            })

        return enriched

    def _overlay_month(self, rows: List[Dict], month: Optional[int], destination_code: Optional[str]) -> List[Dict]:
        monthly = self.data_loader.load_monthly_routes()
        monthly = monthly[monthly['month'] == month]
        if destination_code:
            monthly = monthly[monthly['destination_code'] == destination_code]

        # Last row wins for duplicate keys
        lookup = {
            (mr.get('airline_code'), mr.get('destination_code')): mr
            for mr in to_records(monthly)
        }

        return [
            overlay_monthly(route, lookup.get((route.get('airline_code'), route.get('destination_code'))))
            for route in rows
        ]

    def get_route_detail(self, airline_code: str, destination_code: str) -> Dict:
        """
        Full detail for one route

        Raises:
            RouteNotFoundError: if no route summary matches the key
        """
        routes = to_records(self.data_loader.load_routes())
        route = next(
            (r for r in routes
             if r.get('airline_code') == airline_code and r.get('destination_code') == destination_code),
            None
        )
        if route is None:
            raise RouteNotFoundError(airline_code, destination_code)

        airline = index_by(to_records(self.data_loader.load_airlines()), 'airline_code').get(airline_code)
        airport = index_by(to_records(self.data_loader.load_airports()), 'airport_code').get(destination_code)

        monthly = self.data_loader.load_monthly_routes()
        monthly = monthly[
            (monthly['airline_code'] == airline_code) & (monthly['destination_code'] == destination_code)
        ]

        # Fixture order, not date order
        flights = self.data_loader.load_flights()
        flights = flights[
            (flights['airline_code'] == airline_code) & (flights['destination_code'] == destination_code)
        ].head(Config.DETAIL_FLIGHT_LIMIT)

        weather = self.data_loader.load_weather()
        weather = to_records(
            weather[weather['airport_code'] == destination_code].head(Config.DETAIL_WEATHER_LIMIT)
        )

        return {
            'route': {
                **route,
                'airline_name': airline_name(airline, fallback=route.get('airline_name_zh')),
                'airport_name': airport_name(airport, fallback=route.get('destination_name'))
            },
            'airline': airline,
            'monthlyData': to_records(monthly),
            'flightData': len(flights),
            'avgDelay': average_delay(flights['delay_minutes']),
            'onTimeRate': on_time_rate(flights['delay_minutes']),
            'weatherData': weather[0] if weather else None,
            'airport': airport
        }

    def get_stats(self) -> Dict:
        """
        Totals and averages across every fixture

        Averages over an empty route collection are 0.0.
        """
        routes = self.data_loader.load_routes()
        airlines = self.data_loader.load_airlines()
        flights = self.data_loader.load_flights()

        return {
            'totalRoutes': len(routes),
            'totalAirlines': len(airlines),
            'totalFlights': len(flights),
            'avgSafetyScore': _mean(routes['safety_score']),
            'avgComfortScore': _mean(routes['comfort_score']),
            'avgCompositeScore': _mean(routes['composite_score']),
            'onTimeRate': on_time_rate(flights['delay_minutes'])
        }

    @staticmethod
    def get_months() -> List[Dict]:
        return [{'id': i, 'name': name} for i, name in enumerate(MONTH_NAMES, start=1)]

    def get_airport_detail(self, code: str) -> Dict:
        """
        Airport record with route counts and recent weather

        Raises:
            AirportNotFoundError: if the code has no airport record
        """
        airport = index_by(to_records(self.data_loader.load_airports()), 'airport_code').get(code)
        if airport is None:
            raise AirportNotFoundError(code)

        routes = self.data_loader.load_routes()
        airport_routes = routes[routes['destination_code'] == code]

        weather = self.data_loader.load_weather()
        weather = weather[weather['airport_code'] == code].copy()
        weather['_date'] = pd.to_datetime(weather['weather_date'], errors='coerce')
        recent = (
            weather.sort_values('_date', ascending=False, na_position='last', kind='mergesort')
            .head(Config.RECENT_WEATHER_LIMIT)
            .drop(columns='_date')
        )

        return {
            'airport': {
                **airport,
                'name': airport_name(airport, fallback=code),
                'city': airport_city(airport, fallback=code)
            },
            'routes': len(airport_routes),
            'airlines': int(airport_routes['airline_code'].nunique()),
            'recentWeather': to_records(recent)
        }
