"""
Tests for the Python client, its two-screen view state and the terminal client
"""

import pytest
import requests

from app.client import (
    BOOKING_FAILED,
    DASHBOARD,
    HOME,
    MOCK_BOOKINGS,
    SEARCH_FAILED,
    ClientError,
    DashboardState,
    ReservationClient,
)
from app.models import Booking
from cli import ReservationCLI


class _Unreachable:
    def post(self, *args, **kwargs):
        raise requests.ConnectionError("connection refused")


@pytest.fixture
def state(client, restaurants):
    state = DashboardState(ReservationClient(base_url="", session=client), deposit=100.0)
    state.update_search(date="2030-01-15", time="19:00", party_size=2)
    return state


def test_initial_state():
    state = DashboardState(ReservationClient(base_url="", session=_Unreachable()))
    assert state.current_view == HOME
    assert state.search_params["time"] == "19:00"
    assert state.search_params["party_size"] == 2
    assert [b["id"] for b in state.user_bookings] == [101, 102, 103]
    # Local copies, the module-level mocks stay untouched
    state.cancel(101)
    assert MOCK_BOOKINGS[0]["status"] == "Confirmed"


def test_switch_views(state):
    state.show_dashboard()
    assert state.current_view == DASHBOARD
    state.show_home()
    assert state.current_view == HOME


def test_run_search(state):
    results = state.run_search()
    assert [r["name"] for r in results] == ["Café Solace", "Grill Master PH", "The Local Bistro"]
    assert state.search_query_display == "Available Reservations for (2 Guests, 2030-01-15, 19:00)"


def test_search_failure_is_generic():
    state = DashboardState(ReservationClient(base_url="", session=_Unreachable()))
    with pytest.raises(ClientError, match=SEARCH_FAILED):
        state.run_search()
    assert state.restaurants == []


def test_book_adds_local_booking_and_refreshes(state, db):
    restaurant = state.run_search()[0]

    local = state.book(restaurant)

    assert state.user_bookings[0] is local
    assert local["restaurant"] == restaurant["name"]
    assert local["status"] == "Confirmed"
    assert local["party"] == 2
    assert db.query(Booking).count() == 1
    refreshed = {r["name"]: r for r in state.restaurants}
    assert refreshed[restaurant["name"]]["available_slots"] == restaurant["available_slots"] - 2


def test_book_failure_is_generic(state):
    with pytest.raises(ClientError, match=BOOKING_FAILED):
        state.book({"id": 424242, "name": "Nowhere"})
    assert len(state.user_bookings) == len(MOCK_BOOKINGS)


def test_cancel_is_local_only(state, db):
    local = state.book(state.run_search()[0])

    assert state.cancel(local["id"])
    assert local["status"] == "Cancelled"
    # The stored booking is untouched
    assert db.query(Booking).one().status == "Confirmed"


def test_only_confirmed_bookings_cancel(state):
    assert not state.cancel(102)  # Completed
    assert not state.cancel(999)
    assert state.cancel(103)
    assert not state.cancel(103)


def test_cli_search_book_and_cancel(state, db, monkeypatch, capsys):
    cli = ReservationCLI(state)

    cli.handle("search 2030-01-15 20:00 4")
    out = capsys.readouterr().out
    assert "Available Reservations for (4 Guests, 2030-01-15, 20:00)" in out
    assert "1. Café Solace" in out

    monkeypatch.setattr("builtins.input", lambda prompt="": "y")
    cli.handle("book 1")
    assert "BOOKING CONFIRMED" in capsys.readouterr().out
    assert db.query(Booking).one().party_size == 4

    cli.handle("dashboard")
    assert state.current_view == DASHBOARD
    assert "My Reservations" in capsys.readouterr().out

    booking_id = state.user_bookings[0]["id"]
    cli.handle(f"cancel {booking_id}")
    assert f"Booking #{booking_id} cancelled." in capsys.readouterr().out

    cli.handle("exit")
    assert not cli.running


def test_cli_declined_booking(state, db, monkeypatch):
    cli = ReservationCLI(state)
    state.run_search()
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    cli.handle("book 1")

    assert db.query(Booking).count() == 0


def test_cli_bad_input(state, capsys):
    cli = ReservationCLI(state)
    cli.handle("book x")
    cli.handle("cancel")
    cli.handle("search 2030-01-15 19:00 many")
    cli.handle("dance")
    out = capsys.readouterr().out
    assert "Usage: book" in out
    assert "Usage: cancel" in out
    assert "Guests must be a number" in out
    assert "Unknown command" in out


class _FlakySearch:
    """Passes calls through to ``session`` but fails every search after the first"""

    def __init__(self, session):
        self.session = session
        self.searches = 0

    def post(self, url, **kwargs):
        if url.endswith("/api/search"):
            self.searches += 1
            if self.searches > 1:
                raise requests.ConnectionError("connection reset")
        return self.session.post(url, **kwargs)


def test_booking_confirmed_when_refresh_fails(client, restaurants, db, monkeypatch, capsys):
    state = DashboardState(ReservationClient(base_url="", session=_FlakySearch(client)))
    state.update_search(date="2030-01-15", time="19:00", party_size=2)
    cli = ReservationCLI(state)
    state.run_search()
    monkeypatch.setattr("builtins.input", lambda prompt="": "y")

    cli.handle("book 1")

    out = capsys.readouterr().out
    assert "BOOKING CONFIRMED" in out
    assert SEARCH_FAILED not in out
    assert db.query(Booking).count() == 1
    assert state.user_bookings[0]["status"] == "Confirmed"
    assert state.user_bookings[0]["restaurant"] == "Café Solace"
