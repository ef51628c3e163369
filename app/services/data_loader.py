import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from config import Config

logger = logging.getLogger(__name__)

# Columns every fixture frame is guaranteed to carry, even when empty
AIRPORT_COLUMNS = ['airport_code', 'airport_name_en', 'airport_name_zh', 'city_zh']
AIRLINE_COLUMNS = ['airline_code', 'airline_name_en', 'airline_name_zh', 'airline_type']
ROUTE_COLUMNS = [
    'airline_code', 'destination_code', 'flight_count', 'safety_score',
    'comfort_score', 'composite_score', 'daily_avg_flights'
]
MONTHLY_ROUTE_COLUMNS = ROUTE_COLUMNS + ['month']
FLIGHT_COLUMNS = ['airline_code', 'destination_code', 'delay_minutes']
WEATHER_COLUMNS = [
    'airport_code', 'weather_date', 'weather_desc', 'avg_temp',
    'precipitation', 'wind_speed', 'risk_level'
]

ROUTE_NUMERIC_COLUMNS = [
    'flight_count', 'safety_score', 'comfort_score', 'composite_score', 'daily_avg_flights'
]


def is_missing(value) -> bool:
    """True for None, NA and NaN cells"""
    return value is None or value is pd.NA or value is pd.NaT or (isinstance(value, float) and math.isnan(value))


def _native(value):
    return value.item() if isinstance(value, np.generic) else value


def to_records(df: pd.DataFrame) -> List[Dict]:
    """
    Convert a fixture frame back into JSON-ready records

    Missing cells are dropped so a field absent from the fixture stays absent
    in the response.
    """
    return [
        {key: _native(value) for key, value in row.items() if not is_missing(value)}
        for row in df.to_dict('records')
    ]


def composite_score(safety, comfort):
    """Weighted blend of safety and comfort; works on scalars and Series"""
    return safety * Config.SAFETY_WEIGHT + comfort * Config.COMFORT_WEIGHT


class DataLoader:
    """Load JSON fixtures from the data directory, fresh on every call"""

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir) if data_dir is not None else None

    @property
    def data_dir(self) -> Path:
        # Resolved per call so the directory can be swapped at runtime
        return self._data_dir if self._data_dir is not None else Path(Config.DATA_DIR)

    def load(self, file_name: str, columns: Optional[List[str]] = None) -> pd.DataFrame:
        """
        Load a fixture file into a DataFrame

        Args:
            file_name: Fixture file name relative to the data directory
            columns: Columns to guarantee on the result

        Returns:
            DataFrame of records, or an empty frame if the file is missing,
            unreadable or not a JSON list of objects
        """
        columns = columns or []
        file_path = self.data_dir / file_name

        try:
            with open(file_path, encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {file_name}: {e}")
            return pd.DataFrame(columns=columns)

        if not isinstance(payload, list) or not all(isinstance(record, dict) for record in payload):
            logger.error(f"Failed to load {file_name}: expected a list of records")
            return pd.DataFrame(columns=columns)

        df = pd.DataFrame(payload)

        missing = [col for col in columns if col not in df.columns]
        if missing:
            df = df.reindex(columns=list(df.columns) + missing)

        logger.debug(f"Loaded {len(df)} records from {file_path}")
        return df

    def load_airports(self) -> pd.DataFrame:
        """Load airports fixture"""
        return self.load(Config.AIRPORTS_FILE, AIRPORT_COLUMNS)

    def load_airlines(self) -> pd.DataFrame:
        """Load airline summary fixture"""
        return self.load(Config.AIRLINES_FILE, AIRLINE_COLUMNS)

    def load_routes(self) -> pd.DataFrame:
        """Load route summaries with numeric scores and a composite score on every row"""
        return self._normalize_routes(self.load(Config.ROUTES_FILE, ROUTE_COLUMNS))

    def load_monthly_routes(self) -> pd.DataFrame:
        """Load per-month route summaries"""
        df = self._normalize_routes(self.load(Config.MONTHLY_ROUTES_FILE, MONTHLY_ROUTE_COLUMNS))
        df['month'] = pd.to_numeric(df['month'], errors='coerce')
        return df

    def load_flights(self) -> pd.DataFrame:
        """Load individual flight records"""
        df = self.load(Config.FLIGHTS_FILE, FLIGHT_COLUMNS)
        df['delay_minutes'] = pd.to_numeric(df['delay_minutes'], errors='coerce')
        return df

    def load_weather(self) -> pd.DataFrame:
        """Load weather observations"""
        return self.load(Config.WEATHER_FILE, WEATHER_COLUMNS)

    @staticmethod
    def _normalize_routes(df: pd.DataFrame) -> pd.DataFrame:
        for col in ROUTE_NUMERIC_COLUMNS:
            df[col] = pd.to_numeric(df[col], errors='coerce')

        # Precomputed composite scores are kept; gaps are derived
        derived = composite_score(df['safety_score'], df['comfort_score'])
        df['composite_score'] = df['composite_score'].fillna(derived)

        # Counts with gaps stay integers instead of widening to float
        counts = df['flight_count'].dropna()
        if len(counts) and (counts % 1 == 0).all():
            df['flight_count'] = df['flight_count'].astype('Int64')
        return df
