import logging
import os
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("AIR_ROUTE_API_URL", "http://localhost:3000/api")
REQUEST_TIMEOUT = 10

# Shown when the backend cannot be reached
MOCK_DESTINATIONS = [
    {"code": "HND", "name": "Tokyo Haneda Airport", "city": "Tokyo"},
    {"code": "KIX", "name": "Osaka Kansai Airport", "city": "Osaka"},
    {"code": "TPE", "name": "Taiwan Taoyuan Airport", "city": "Taipei"},
    {"code": "OKA", "name": "Naha Airport", "city": "Okinawa"},
    {"code": "ICN", "name": "Incheon International Airport", "city": "Seoul"},
    {"code": "BKK", "name": "Suvarnabhumi Airport", "city": "Bangkok"},
    {"code": "SIN", "name": "Changi Airport", "city": "Singapore"},
    {"code": "KUL", "name": "Kuala Lumpur Airport", "city": "Kuala Lumpur"},
    {"code": "MNL", "name": "Ninoy Aquino Airport", "city": "Manila"},
    {"code": "SGN", "name": "Tan Son Nhat Airport", "city": "Ho Chi Minh"},
]


class AdvisorClient:
    """Thin HTTP client for the Air Route Advisor API"""

    def __init__(self, base_url: str = API_BASE_URL, timeout: float = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: Optional[Dict] = None):
        response = requests.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def destinations(self) -> List[Dict]:
        """Destination list, falling back to the mock list if the backend is down"""
        try:
            destinations = self._get("/destinations")
            logger.info(f"Loaded {len(destinations)} destinations")
            return destinations
        except requests.exceptions.RequestException as e:
            logger.warning(f"Failed to load destinations, using mock data: {e}")
            return list(MOCK_DESTINATIONS)

    def popular_destinations(self, top_n: int = 5) -> List[Dict]:
        return self._get("/popular-destinations")[:top_n]

    def stats(self) -> Dict:
        return self._get("/stats")

    def months(self) -> List[Dict]:
        return self._get("/months")

    def search_routes(
        self,
        destination: str,
        month: Optional[int] = None,
        sort: Optional[str] = None,
        limit: int = 12
    ) -> List[Dict]:
        """Search routes; empty filters are left out of the query string"""
        params = {"destination": destination, "limit": limit}
        if month:
            params["month"] = month
        if sort:
            params["sort"] = sort
        return self._get("/routes", params=params)

    def route_detail(self, airline_code: str, destination_code: str) -> Dict:
        return self._get(f"/routes/{airline_code}/{destination_code}")

    def airport_detail(self, code: str) -> Dict:
        return self._get(f"/airports/{code}")
