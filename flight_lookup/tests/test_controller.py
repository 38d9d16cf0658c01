import asyncio
import random
import time

import pytest

from flight_lookup.aviationstack_fetcher import FlightFetcherError
from flight_lookup.config import Settings
from flight_lookup.controller import (
    DEFAULT_ERROR_MESSAGE,
    FlightLookupController,
    SettingsPanel,
    ViewState,
)
from flight_lookup.credentials import CredentialStore
from flight_lookup.models import FlightRecord


def record_for(flight_number):
    return FlightRecord.from_api(
        {
            "flight_status": "scheduled",
            "airline": {"name": "Lufthansa"},
            "flight": {"iata": flight_number},
            "departure": {"iata": "FRA", "timezone": "Europe/Berlin",
                          "scheduled": "2024-01-01T08:00:00+00:00"},
            "arrival": {"iata": "SIN", "timezone": "Asia/Singapore",
                        "scheduled": "2024-01-01T20:00:00+00:00"},
        }
    )


class FakeFetcher:
    def __init__(self, controller=None, error=None, delays=None):
        self.controller = controller
        self.error = error
        self.delays = delays or {}
        self.seen_states = []
        self.keys = []

    def factory(self, access_key):
        self.keys.append(access_key)
        return self

    def fetch_flight(self, flight_number):
        if self.controller is not None:
            self.seen_states.append(self.controller.state)
        time.sleep(self.delays.get(flight_number, 0))
        if self.error is not None:
            raise self.error
        return record_for(flight_number)


@pytest.fixture
def settings(tmp_path):
    return Settings(mock_delay_s=0, storage_path=tmp_path / "storage.json")


@pytest.fixture
def store(settings):
    return CredentialStore(settings.storage_path)


def make_controller(store, settings, fetcher=None, **kwargs):
    return FlightLookupController(
        store,
        settings=settings,
        fetcher_factory=fetcher.factory if fetcher else None,
        **kwargs,
    )


def test_starts_idle(store, settings):
    ctl = make_controller(store, settings)
    assert ctl.state is ViewState.IDLE
    assert ctl.credential is None
    assert ctl.render_state() == "Enter a flight number to search."


def test_mock_path_without_credential(store, settings):
    ctl = make_controller(store, settings, rng=random.Random(7))
    asyncio.run(ctl.search("  ba117 "))

    assert ctl.state is ViewState.RESULT
    assert ctl.record.flight.iata == "BA117"
    assert ctl.record.departure.iata != ctl.record.arrival.iata
    assert len(ctl.map_adapter.markers) == 2
    assert "BA117" in ctl.render_state()


def test_empty_input_keeps_current_state(store, settings):
    fetcher = FakeFetcher(error=FlightFetcherError("Flight not found."))
    store.save("key")
    ctl = make_controller(store, settings, fetcher)

    asyncio.run(ctl.search("   "))
    assert ctl.state is ViewState.IDLE

    asyncio.run(ctl.search("xx1"))
    assert ctl.state is ViewState.ERROR
    asyncio.run(ctl.search(""))
    assert ctl.state is ViewState.ERROR
    assert ctl.error_message == "Flight not found."


def test_live_path_uses_stored_key_and_shows_loading(store, settings):
    store.save("abc123")
    fetcher = FakeFetcher()
    ctl = make_controller(store, settings, fetcher)
    fetcher.controller = ctl

    asyncio.run(ctl.search("lh400"))

    assert fetcher.keys == ["abc123"]
    assert fetcher.seen_states == [ViewState.LOADING]
    assert ctl.state is ViewState.RESULT
    assert ctl.pipeline.current_view.duration == "12h 0m"


def test_error_without_message_falls_back(store, settings):
    store.save("abc123")
    ctl = make_controller(store, settings, FakeFetcher(error=RuntimeError()))

    asyncio.run(ctl.search("lh400"))

    assert ctl.state is ViewState.ERROR
    assert ctl.render_state() == DEFAULT_ERROR_MESSAGE


def test_stale_result_is_discarded(store, settings):
    store.save("abc123")
    fetcher = FakeFetcher(delays={"SLOW1": 0.3})
    ctl = make_controller(store, settings, fetcher)

    async def both():
        await asyncio.gather(ctl.search("slow1"), ctl.search("fast2"))

    asyncio.run(both())

    assert ctl.state is ViewState.RESULT
    assert ctl.record.flight.iata == "FAST2"
    assert ctl.pipeline.current_view.flight_number == "FAST2"


def test_stale_failure_is_discarded(store, settings):
    store.save("abc123")

    class Mixed(FakeFetcher):
        def fetch_flight(self, flight_number):
            if flight_number == "BAD1":
                time.sleep(0.3)
                raise FlightFetcherError("Flight not found.")
            return record_for(flight_number)

    ctl = make_controller(store, settings, Mixed())

    async def both():
        await asyncio.gather(ctl.search("bad1"), ctl.search("good2"))

    asyncio.run(both())
    assert ctl.state is ViewState.RESULT
    assert ctl.record.flight.iata == "GOOD2"


def test_only_enter_triggers_search(store, settings):
    ctl = make_controller(store, settings)
    asyncio.run(ctl.handle_key("a", "BA117"))
    assert ctl.state is ViewState.IDLE
    asyncio.run(ctl.handle_key("Enter", "BA117"))
    assert ctl.state is ViewState.RESULT


def test_settings_panel_toggle(store, settings):
    ctl = make_controller(store, settings)
    ctl.toggle_settings()
    assert ctl.settings_panel.visible
    ctl.toggle_settings()
    assert not ctl.settings_panel.visible
    ctl.open_settings()
    ctl.close_settings()
    assert not ctl.settings_panel.visible


def test_save_settings_persists_and_acknowledges(store, settings):
    acks = []
    ctl = make_controller(store, settings, acknowledge=acks.append)
    ctl.open_settings()

    ctl.save_settings("  abc123 ")

    assert store.load() == "abc123"
    assert ctl.credential == "abc123"
    assert not ctl.settings_panel.visible
    assert acks == ["Settings saved!"]

    reloaded = make_controller(store, settings)
    assert reloaded.credential == "abc123"
    assert reloaded.settings_panel.credential_input == "abc123"


def test_save_empty_clears_credential(store, settings):
    store.save("abc123")
    ctl = make_controller(store, settings)

    ctl.save_settings("   ")

    assert store.load() is None
    assert ctl.credential is None


def test_settings_panel_methods():
    panel = SettingsPanel()
    panel.open()
    assert panel.visible
    panel.close()
    assert not panel.visible
    panel.toggle()
    assert panel.visible
