"""Synthetic flight records for running without an API credential."""

from __future__ import annotations

import datetime as dt
import random
from typing import Optional

from .models import Aircraft, Airline, Endpoint, FlightIdent, FlightRecord

AIRLINES = [
    "American Airlines",
    "British Airways",
    "Lufthansa",
    "Emirates",
    "Delta",
    "Singapore Airlines",
]

# (code, city, timezone)
AIRPORTS = [
    ("JFK", "New York", "America/New_York"),
    ("LHR", "London", "Europe/London"),
    ("DXB", "Dubai", "Asia/Dubai"),
    ("SIN", "Singapore", "Asia/Singapore"),
    ("FRA", "Frankfurt", "Europe/Berlin"),
    ("LAX", "Los Angeles", "America/Los_Angeles"),
    ("HND", "Tokyo", "Asia/Tokyo"),
]

STATUSES = ["active", "scheduled", "landed", "delayed"]
GATE_LETTERS = "ABCDE"
MOCK_AIRCRAFT = "B777"

MAX_DEPARTED_AGO_H = 5
MIN_FLIGHT_H = 2
MAX_FLIGHT_H = 12


def _gate(rng: random.Random) -> str:
    return f"{rng.choice(GATE_LETTERS)}{rng.randint(1, 20)}"


def _endpoint(
    airport: tuple[str, str, str], when: dt.datetime, rng: random.Random
) -> Endpoint:
    code, city, timezone = airport
    return Endpoint(
        iata=code,
        airport=f"{city} International",
        timezone=timezone,
        scheduled=when.isoformat(timespec="milliseconds"),
        terminal=str(rng.randint(1, 8)),
        gate=_gate(rng),
    )


def generate_mock_flight(
    flight_number: str,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[dt.datetime] = None,
) -> FlightRecord:
    """Return a random but plausible record for *flight_number*.

    Departure lies up to five hours in the past and the flight lasts between
    two and twelve hours. Departure and arrival airports always differ.
    """
    rng = rng or random.Random()
    now = now or dt.datetime.now(dt.timezone.utc)

    airline = rng.choice(AIRLINES)
    dep = rng.choice(AIRPORTS)
    arr = rng.choice(AIRPORTS)
    while arr[0] == dep[0]:
        arr = rng.choice(AIRPORTS)

    status = rng.choice(STATUSES)

    dep_time = now - dt.timedelta(hours=rng.uniform(0, MAX_DEPARTED_AGO_H))
    arr_time = dep_time + dt.timedelta(hours=rng.uniform(MIN_FLIGHT_H, MAX_FLIGHT_H))

    return FlightRecord(
        status=status,
        airline=Airline(name=airline),
        flight=FlightIdent(iata=flight_number),
        departure=_endpoint(dep, dep_time, rng),
        arrival=_endpoint(arr, arr_time, rng),
        aircraft=Aircraft(iata=MOCK_AIRCRAFT),
    )


__all__ = ["AIRLINES", "AIRPORTS", "STATUSES", "generate_mock_flight"]
