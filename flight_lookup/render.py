"""Turn a FlightRecord into display strings and redraw the map."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from .formatting import (
    city_from_timezone,
    format_date,
    format_duration,
    format_status,
    format_time,
    status_css_class,
)
from .map_adapter import MapAdapter
from .models import Endpoint, FlightRecord

MISSING = "-"
UNKNOWN_AIRCRAFT = "Unknown"


@dataclass(frozen=True, slots=True)
class EndpointView:
    code: str
    city: str
    time: str
    date: str
    terminal: str
    gate: str

    @classmethod
    def from_endpoint(
        cls, endpoint: Endpoint, tz: dt.tzinfo | None = None
    ) -> "EndpointView":
        return cls(
            code=endpoint.iata,
            city=city_from_timezone(endpoint.timezone),
            time=format_time(endpoint.scheduled, tz),
            date=format_date(endpoint.scheduled, tz),
            terminal=endpoint.terminal or MISSING,
            gate=endpoint.gate or MISSING,
        )


@dataclass(frozen=True, slots=True)
class FlightView:
    """Everything the result panel shows for one flight."""

    airline: str
    flight_number: str
    status_text: str
    status_class: str
    departure: EndpointView
    arrival: EndpointView
    aircraft: str
    duration: str

    @classmethod
    def from_record(
        cls, record: FlightRecord, tz: dt.tzinfo | None = None
    ) -> "FlightView":
        aircraft = record.aircraft.iata if record.aircraft else UNKNOWN_AIRCRAFT
        return cls(
            airline=record.airline.name,
            flight_number=record.flight.iata,
            status_text=format_status(record.status),
            status_class=status_css_class(record.status),
            departure=EndpointView.from_endpoint(record.departure, tz),
            arrival=EndpointView.from_endpoint(record.arrival, tz),
            aircraft=aircraft or UNKNOWN_AIRCRAFT,
            duration=format_duration(
                record.departure.scheduled, record.arrival.scheduled
            ),
        )

    def as_text(self) -> str:
        """Plain-text rendering used by the command line."""
        lines = [
            f"{self.airline}  {self.flight_number}  [{self.status_text}]",
        ]
        for label, ep in (("Departure", self.departure), ("Arrival", self.arrival)):
            lines.append(
                f"{label:<9}  {ep.code}  {ep.city:<14}  {ep.date} {ep.time}"
                f"  Terminal {ep.terminal}  Gate {ep.gate}"
            )
        lines.append(f"Aircraft   {self.aircraft}")
        lines.append(f"Duration   {self.duration}")
        return "\n".join(lines)


class RenderPipeline:
    def __init__(self, map_adapter: MapAdapter, tz: dt.tzinfo | None = None) -> None:
        self.map_adapter = map_adapter
        self.tz = tz
        self.current_view: Optional[FlightView] = None

    def render(self, record: FlightRecord) -> None:
        """Refresh the displayed fields and redraw the route."""
        self.current_view = FlightView.from_record(record, self.tz)
        self.map_adapter.update(record)


__all__ = ["EndpointView", "FlightView", "RenderPipeline"]
