"""View-model for the lookup screen.

Owns the view state, the stored credential, the settings panel and the map.
Exactly one of the four states is visible at a time; ``_show`` is the only
transition. Searches are not serialised: a newer search supersedes an older
one, and results from a superseded search are dropped on arrival.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional

from .aviationstack_fetcher import AviationstackFetcher
from .config import Settings, get_settings
from .credentials import CredentialStore
from .map_adapter import MapAdapter
from .mock_generator import generate_mock_flight
from .models import FlightRecord
from .render import RenderPipeline

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to fetch flight data."
SETTINGS_SAVED_MESSAGE = "Settings saved!"
IDLE_MESSAGE = "Enter a flight number to search."
LOADING_MESSAGE = "Searching..."


class ViewState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    RESULT = "result"


@dataclass
class SettingsPanel:
    visible: bool = False
    credential_input: str = ""

    def open(self) -> None:
        self.visible = True

    def close(self) -> None:
        self.visible = False

    def toggle(self) -> None:
        self.visible = not self.visible


FetcherFactory = Callable[[str], AviationstackFetcher]


class FlightLookupController:
    def __init__(
        self,
        store: CredentialStore,
        map_adapter: Optional[MapAdapter] = None,
        *,
        settings: Optional[Settings] = None,
        fetcher_factory: Optional[FetcherFactory] = None,
        acknowledge: Optional[Callable[[str], None]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store
        self.map_adapter = map_adapter or MapAdapter()
        self.pipeline = RenderPipeline(self.map_adapter)
        self.fetcher_factory = fetcher_factory or self._default_fetcher
        self.acknowledge = acknowledge or (lambda message: None)
        self.rng = rng

        self.state = ViewState.IDLE
        self.error_message = ""
        self.record: Optional[FlightRecord] = None
        self._generation = 0

        self.credential = store.load()
        self.settings_panel = SettingsPanel(credential_input=self.credential or "")

    def _default_fetcher(self, access_key: str) -> AviationstackFetcher:
        return AviationstackFetcher(
            access_key,
            base_url=self.settings.api_base_url,
            relay_url=self.settings.relay_url,
            timeout=self.settings.request_timeout_s,
        )

    # ── view state ───────────────────────────────────────────────

    def _show(self, state: ViewState) -> None:
        self.state = state

    def _show_error(self, message: str) -> None:
        self.error_message = message
        self._show(ViewState.ERROR)

    def render_state(self) -> str:
        """Text for whichever panel is currently visible."""
        if self.state is ViewState.LOADING:
            return LOADING_MESSAGE
        if self.state is ViewState.ERROR:
            return self.error_message
        if self.state is ViewState.RESULT and self.pipeline.current_view:
            return self.pipeline.current_view.as_text()
        return IDLE_MESSAGE

    # ── search ───────────────────────────────────────────────────

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def _load(self, flight_number: str) -> FlightRecord:
        if self.credential:
            fetcher = self.fetcher_factory(self.credential)
            return await asyncio.to_thread(fetcher.fetch_flight, flight_number)
        await asyncio.sleep(self.settings.mock_delay_s)
        return generate_mock_flight(flight_number, rng=self.rng)

    async def search(self, raw_input: str) -> None:
        """Look up the flight typed in *raw_input* and show the outcome."""
        flight_number = (raw_input or "").strip().upper()
        if not flight_number:
            return

        self._generation += 1
        generation = self._generation
        self._show(ViewState.LOADING)

        try:
            record = await self._load(flight_number)
            if self._is_stale(generation):
                logger.debug("Dropping stale result for %s", flight_number)
                return
            self.pipeline.render(record)
        except Exception as exc:
            if self._is_stale(generation):
                logger.debug("Dropping stale failure for %s: %s", flight_number, exc)
                return
            logger.error("Lookup for %s failed: %s", flight_number, exc)
            self._show_error(str(exc) or DEFAULT_ERROR_MESSAGE)
            return

        self.record = record
        self._show(ViewState.RESULT)

    async def handle_key(self, key: str, raw_input: str) -> None:
        if key == "Enter":
            await self.search(raw_input)

    # ── settings ─────────────────────────────────────────────────

    def open_settings(self) -> None:
        self.settings_panel.open()

    def close_settings(self) -> None:
        self.settings_panel.close()

    def toggle_settings(self) -> None:
        self.settings_panel.toggle()

    def save_settings(self, value: str) -> None:
        """Persist the access key, or forget it when *value* is blank."""
        value = (value or "").strip()
        if value:
            self.store.save(value)
        else:
            self.store.clear()
        self.credential = value or None
        self.settings_panel.credential_input = value
        self.close_settings()
        self.acknowledge(SETTINGS_SAVED_MESSAGE)


__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "FlightLookupController",
    "SettingsPanel",
    "ViewState",
]
