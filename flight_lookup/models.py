"""Data models used throughout the project."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


@dataclass(frozen=True, slots=True)
class Airline:
    name: str


@dataclass(frozen=True, slots=True)
class FlightIdent:
    iata: str


@dataclass(frozen=True, slots=True)
class Aircraft:
    iata: str


@dataclass(frozen=True, slots=True)
class Endpoint:
    """One side of a flight: departure or arrival airport."""

    iata: str
    airport: str
    timezone: Optional[str]
    scheduled: Optional[str]
    terminal: Optional[str] = None
    gate: Optional[str] = None

    @classmethod
    def from_api(cls, item: Mapping[str, Any] | None) -> "Endpoint":
        item = item or {}
        return cls(
            iata=item.get("iata") or "",
            airport=item.get("airport") or "",
            timezone=item.get("timezone"),
            scheduled=item.get("scheduled"),
            terminal=_opt_str(item.get("terminal")),
            gate=_opt_str(item.get("gate")),
        )

    def to_dict(self) -> dict:
        return {
            "iata": self.iata,
            "airport": self.airport,
            "timezone": self.timezone,
            "scheduled": self.scheduled,
            "terminal": self.terminal,
            "gate": self.gate,
        }


@dataclass(frozen=True, slots=True)
class FlightRecord:
    """A single flight as returned by the flights endpoint (or the mock)."""

    status: str
    airline: Airline
    flight: FlightIdent
    departure: Endpoint
    arrival: Endpoint
    aircraft: Optional[Aircraft] = None

    @classmethod
    def from_api(cls, item: Mapping[str, Any]) -> "FlightRecord":
        """Map one element of the API ``data`` list onto a record."""
        aircraft = item.get("aircraft")
        return cls(
            status=item.get("flight_status") or "",
            airline=Airline(name=(item.get("airline") or {}).get("name") or ""),
            flight=FlightIdent(iata=(item.get("flight") or {}).get("iata") or ""),
            departure=Endpoint.from_api(item.get("departure")),
            arrival=Endpoint.from_api(item.get("arrival")),
            aircraft=Aircraft(iata=aircraft.get("iata") or "") if aircraft else None,
        )

    def to_dict(self) -> dict:
        """Return the record in the API's JSON shape."""
        return {
            "flight_status": self.status,
            "airline": {"name": self.airline.name},
            "flight": {"iata": self.flight.iata},
            "departure": self.departure.to_dict(),
            "arrival": self.arrival.to_dict(),
            "aircraft": {"iata": self.aircraft.iata} if self.aircraft else None,
        }


__all__ = ["Aircraft", "Airline", "Endpoint", "FlightIdent", "FlightRecord"]
