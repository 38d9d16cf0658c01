from __future__ import annotations

import logging
from urllib.parse import urlencode

import requests

from .models import FlightRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://api.aviationstack.com/v1"
DEFAULT_RELAY_URL = "https://api.allorigins.win/raw"


class FlightFetcherError(RuntimeError):
    """Flight lookup failed; the message is meant for the user."""


def build_target_url(base_url: str, access_key: str, flight_number: str) -> str:
    """Return the flights endpoint URL for *flight_number*."""
    query = urlencode({"access_key": access_key, "flight_iata": flight_number})
    return f"{base_url.rstrip('/')}/flights?{query}"


def build_relay_url(relay_url: str, target_url: str) -> str:
    """Wrap *target_url* in the CORS relay.

    The flights endpoint is plain HTTP on the free tier, so requests go
    through an HTTPS relay that fetches it server-side.
    """
    return f"{relay_url}?{urlencode({'url': target_url})}"


class AviationstackFetcher:
    """
    Client for the aviationstack ``/v1/flights`` endpoint, called through a
    read-through relay.
    """

    def __init__(
        self,
        access_key: str,
        base_url: str = DEFAULT_API_BASE_URL,
        relay_url: str = DEFAULT_RELAY_URL,
        timeout: float | None = None,
    ) -> None:
        self.access_key = access_key
        self.base_url = base_url.rstrip("/")
        self.relay_url = relay_url
        self.timeout = timeout

    # ──────────────────────────────────────────────────────────

    def fetch_flight(self, flight_number: str) -> FlightRecord:
        """Return the first flight the API reports for *flight_number*."""
        target = build_target_url(self.base_url, self.access_key, flight_number)
        url = build_relay_url(self.relay_url, target)

        logger.info("Fetching flight %s", flight_number)
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Request for %s failed: %s", flight_number, exc)
            raise FlightFetcherError(str(exc)) from exc

        try:
            result = resp.json()
        except ValueError as exc:
            raise FlightFetcherError(str(exc)) from exc

        return self._to_record(result)

    def _to_record(self, result: dict) -> FlightRecord:
        """Map the response body onto a record or raise."""
        error = result.get("error")
        if error is not None:
            info = error.get("info") if isinstance(error, dict) else None
            raise FlightFetcherError(info or "API Error")

        data = result.get("data")
        if not data:
            raise FlightFetcherError("Flight not found.")

        # the API may list several dates for one flight number; the first
        # one is used as-is
        return FlightRecord.from_api(data[0])


def main(argv: list[str] | None = None) -> None:
    """Fetch one flight and print it."""
    import argparse
    import json

    from .config import get_settings
    from .credentials import CredentialStore

    parser = argparse.ArgumentParser()
    parser.add_argument("flight")
    parser.add_argument("--access-key", dest="access_key", default=None)
    args = parser.parse_args(argv)

    settings = get_settings()
    access_key = args.access_key or CredentialStore(settings.storage_path).load()
    if not access_key:
        print("No access key configured")
        return

    fetcher = AviationstackFetcher(
        access_key,
        base_url=settings.api_base_url,
        relay_url=settings.relay_url,
        timeout=settings.request_timeout_s,
    )
    try:
        record = fetcher.fetch_flight(args.flight.strip().upper())
    except FlightFetcherError as exc:
        print(f"Error: {exc}")
    else:
        print(json.dumps(record.to_dict(), indent=2))


__all__ = [
    "AviationstackFetcher",
    "FlightFetcherError",
    "build_relay_url",
    "build_target_url",
    "main",
]
