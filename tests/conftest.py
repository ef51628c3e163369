import json

import pytest

from config import Config
from app.services.data_loader import DataLoader
from app.services.route_analysis import RouteAnalyzer


AIRPORTS = [
    {"airport_code": "HND", "airport_name_en": "Tokyo Haneda", "airport_name_zh": "東京羽田", "city_zh": "Tokyo"},
    {"airport_code": "KIX", "airport_name_zh": "關西", "airport_name_en": ""},
    {"airport_code": "NRT", "airport_name_en": "Narita", "city_zh": "Tokyo"},
    {"airport_code": "HND", "airport_name_en": "Duplicate Haneda", "city_zh": "Elsewhere"},
]

AIRLINES = [
    {"airline_code": "AA", "airline_name_en": "Alpha Air", "airline_name_zh": "阿爾法", "airline_type": "full_service"},
    {"airline_code": "BB", "airline_name_zh": "貝塔", "airline_type": "low_cost"},
]

ROUTES = [
    {"airline_code": "AA", "airline_name_en": "Alpha Air", "destination_code": "HND",
     "flight_count": 10, "safety_score": 90, "comfort_score": 80, "composite_score": 86, "daily_avg_flights": 0.5},
    {"airline_code": "BB", "airline_name_zh": "貝塔", "destination_code": "HND",
     "flight_count": 20, "safety_score": 70, "comfort_score": 60},
    {"airline_code": "AA", "airline_name_en": "Alpha Air", "destination_code": "KIX",
     "flight_count": 5, "safety_score": 95, "comfort_score": 95, "composite_score": 95},
    {"airline_code": "CC", "destination_code": "XXX", "destination_name": "Mystery Field",
     "flight_count": 1, "safety_score": 50, "comfort_score": 50, "composite_score": 50},
]

MONTHLY_ROUTES = [
    {"airline_code": "AA", "destination_code": "HND", "month": 1,
     "flight_count": 3, "safety_score": 10, "comfort_score": 10, "composite_score": 10},
    {"airline_code": "AA", "destination_code": "HND", "month": 7,
     "flight_count": 4, "safety_score": 99, "comfort_score": 99, "composite_score": 99},
    {"airline_code": "BB", "destination_code": "HND", "month": 7,
     "safety_score": 60, "comfort_score": 60},
    {"airline_code": "AA", "destination_code": "KIX", "month": 7,
     "safety_score": 1, "comfort_score": 1, "composite_score": 1},
]

FLIGHTS = [
    {"airline_code": "AA", "destination_code": "HND", "delay_minutes": 5},
    {"airline_code": "AA", "destination_code": "HND", "delay_minutes": 40},
    {"airline_code": "AA", "destination_code": "HND"},
    {"airline_code": "AA", "destination_code": "HND", "delay_minutes": 15},
    {"airline_code": "CC", "destination_code": "XXX", "delay_minutes": 30},
]

WEATHER = [
    {"airport_code": "HND", "weather_date": "2024-07-01", "weather_desc": "Sunny", "risk_level": "low"},
    {"airport_code": "KIX", "weather_date": "2024-07-05", "weather_desc": "Cloudy", "risk_level": "low"},
    {"airport_code": "HND", "weather_date": "2024-07-03", "weather_desc": "Rain", "risk_level": "medium"},
]

SAMPLE_FIXTURES = {
    Config.AIRPORTS_FILE: AIRPORTS,
    Config.AIRLINES_FILE: AIRLINES,
    Config.ROUTES_FILE: ROUTES,
    Config.MONTHLY_ROUTES_FILE: MONTHLY_ROUTES,
    Config.FLIGHTS_FILE: FLIGHTS,
    Config.WEATHER_FILE: WEATHER,
}


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Empty data directory wired in as Config.DATA_DIR"""
    monkeypatch.setattr(Config, "DATA_DIR", tmp_path)
    return tmp_path


@pytest.fixture
def write_fixtures(data_dir):
    """Write {file_name: records} into the data directory"""
    def _write(fixtures):
        for name, records in fixtures.items():
            (data_dir / name).write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
        return data_dir
    return _write


@pytest.fixture
def sample_data(write_fixtures):
    return write_fixtures(SAMPLE_FIXTURES)


@pytest.fixture
def loader(data_dir):
    return DataLoader()


@pytest.fixture
def analyzer(loader):
    return RouteAnalyzer(loader)
