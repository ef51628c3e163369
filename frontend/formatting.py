from typing import Dict, Optional

AIRLINE_TYPE_LABELS = {
    "full_service": "Full Service",
    "low_cost": "Low Cost",
}

SORT_OPTIONS = {
    "Composite Score": "composite_score",
    "Safety Score": "safety_score",
    "Comfort Score": "comfort_score",
    "Flight Count": "flight_count",
}

BAR_LABEL_LENGTH = 10


def score_band(score: Optional[float]) -> str:
    """Colour band for a score card: excellent, good or average"""
    if score is None:
        return "average"
    if score >= 90:
        return "excellent"
    if score >= 80:
        return "good"
    return "average"


def airline_type_label(airline_type: Optional[str]) -> str:
    # Anything that is not full service is shown as low cost
    return AIRLINE_TYPE_LABELS["full_service"] if airline_type == "full_service" else AIRLINE_TYPE_LABELS["low_cost"]


def route_airline_name(route: Dict) -> str:
    return route.get("airline_name") or route.get("airline_name_zh") or route.get("airline_code", "")


def bar_label(name: Optional[str], length: int = BAR_LABEL_LENGTH) -> str:
    """Truncate long airline names for chart axes"""
    name = name or ""
    return name[:length] + ("..." if len(name) > length else "")


def format_score(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "-"
