from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from .config import settings

logger = logging.getLogger(__name__)

HOME = "home"
DASHBOARD = "dashboard"

SEARCH_FAILED = "Service connection failed. Please try again later."
BOOKING_FAILED = "Failed to complete booking. The slot might have just been taken."

# Shown on the dashboard until real bookings are made in this session
MOCK_BOOKINGS = [
    {"id": 101, "restaurant": "The Local Bistro", "date": "2025-11-20", "time": "19:00", "party": 2, "status": "Confirmed"},
    {"id": 102, "restaurant": "Café Solace", "date": "2025-11-15", "time": "13:30", "party": 4, "status": "Completed"},
    {"id": 103, "restaurant": "Grill Master PH", "date": "2025-12-05", "time": "18:30", "party": 6, "status": "Confirmed"},
]


class ClientError(Exception):
    """Raised when the booking service cannot be reached or rejects a call"""


class ReservationClient:
    """Thin HTTP wrapper around the search and book endpoints.

    ``session`` may be any object with a requests-style ``post`` method,
    e.g. a ``requests.Session`` or FastAPI's ``TestClient``.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10):
        self.base_url = (settings.api_url if base_url is None else base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, path: str, payload: Dict[str, Any]):
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ClientError(str(e)) from e
        if response.status_code >= 400:
            raise ClientError(f"{path} returned HTTP {response.status_code}")
        return response.json()

    def search(self, date: str, time: str, party_size: int) -> List[Dict[str, Any]]:
        return self._post("/api/search", {"date": date, "time": time, "partySize": party_size})

    def book(self, restaurant_id: int, customer_name: str, party_size: int,
             booking_time: str, deposit: float = 0.0) -> Dict[str, Any]:
        return self._post("/api/book", {
            "restaurantId": restaurant_id,
            "customerName": customer_name,
            "partySize": party_size,
            "bookingTime": booking_time,
            "deposit": deposit,
        })


class DashboardState:
    """Two-screen view state: search results on ``home``, bookings on ``dashboard``.

    The bookings list is local to this object. Cancelling only changes the local
    status, the service is never told.
    """

    def __init__(self, client: ReservationClient, customer_name: Optional[str] = None,
                 deposit: Optional[float] = None):
        self.client = client
        self.customer_name = customer_name or settings.demo_customer_name
        self.deposit = settings.demo_deposit if deposit is None else deposit
        self.current_view = HOME
        self.search_params = {"date": date.today().isoformat(), "time": "19:00", "party_size": 2}
        self.restaurants: List[Dict[str, Any]] = []
        self.search_query_display = ""
        self.user_bookings = [dict(b) for b in MOCK_BOOKINGS]

    def show_home(self):
        self.current_view = HOME

    def show_dashboard(self):
        self.current_view = DASHBOARD

    def update_search(self, date: Optional[str] = None, time: Optional[str] = None,
                      party_size: Optional[int] = None):
        if date is not None:
            self.search_params["date"] = date
        if time is not None:
            self.search_params["time"] = time
        if party_size is not None:
            self.search_params["party_size"] = party_size

    def run_search(self) -> List[Dict[str, Any]]:
        params = self.search_params
        self.restaurants = []
        self.search_query_display = (
            f"Available Reservations for ({params['party_size']} Guests, {params['date']}, {params['time']})"
        )
        try:
            self.restaurants = self.client.search(params["date"], params["time"], params["party_size"])
        except ClientError as e:
            logger.error("Error fetching restaurants: %s", e)
            raise ClientError(SEARCH_FAILED) from e
        return self.restaurants

    def book(self, restaurant: Dict[str, Any]) -> Dict[str, Any]:
        """Book ``restaurant`` for the current search and record it locally"""
        params = self.search_params
        try:
            result = self.client.book(
                restaurant_id=restaurant["id"],
                customer_name=self.customer_name,
                party_size=params["party_size"],
                booking_time=f"{params['date']}T{params['time']}:00",
                deposit=self.deposit,
            )
        except ClientError as e:
            logger.error("Error creating booking: %s", e)
            raise ClientError(BOOKING_FAILED) from e

        local = {
            "id": result["booking"]["id"],
            "restaurant": restaurant["name"],
            "date": params["date"],
            "time": params["time"],
            "party": params["party_size"],
            "status": "Confirmed",
        }
        self.user_bookings.insert(0, local)
        try:
            self.run_search()
        except ClientError as e:
            # The booking is stored, a stale result list is not a booking failure
            logger.error("Error refreshing results after booking: %s", e)
        return local

    def cancel(self, booking_id: int) -> bool:
        """Mark a confirmed local booking as cancelled. Returns False if none matched."""
        for booking in self.user_bookings:
            if booking["id"] == booking_id and booking["status"] == "Confirmed":
                booking["status"] = "Cancelled"
                return True
        return False
