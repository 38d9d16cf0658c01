from __future__ import annotations

import asyncio
import json
import locale
import logging
from typing import Optional

import click

from .config import get_settings
from .controller import FlightLookupController, ViewState
from .credentials import CredentialStore
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def _controller() -> FlightLookupController:
    settings = get_settings()
    return FlightLookupController(
        CredentialStore(settings.storage_path),
        settings=settings,
        acknowledge=click.echo,
    )


def _mask(value: str) -> str:
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


@click.group()
def cli() -> None:
    """Look up a flight by its number."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error as exc:
        logger.warning("Keeping the default time locale: %s", exc)


@cli.command()
@click.argument("flight")
@click.option("--map-out", type=click.Path(dir_okay=False), help="Write the route map as HTML")
@click.option("--json", "as_json", is_flag=True, help="Print the raw flight record")
def lookup(flight: str, map_out: Optional[str], as_json: bool) -> None:
    """Fetch one flight and print it."""
    controller = _controller()
    if not controller.credential:
        logger.info("No access key stored, using generated data")
    asyncio.run(controller.search(flight))

    if controller.state is ViewState.ERROR:
        click.echo(f"Error: {controller.error_message}", err=True)
        raise SystemExit(1)
    if controller.state is not ViewState.RESULT:
        click.echo(controller.render_state())
        return

    if as_json:
        click.echo(json.dumps(controller.record.to_dict(), indent=2))
    else:
        click.echo(controller.render_state())
    if map_out:
        controller.map_adapter.save(map_out)


@cli.command()
@click.option("--map-out", type=click.Path(dir_okay=False), help="Rewrite the route map as HTML after each lookup")
def interactive(map_out: Optional[str]) -> None:
    """Prompt for flight numbers until ':quit'."""
    controller = _controller()
    click.echo("Type a flight number, ':settings' to edit the access key or ':quit'.")
    while True:
        line = click.prompt("Flight", default="", show_default=False)
        command = line.strip().lower()
        if command in (":quit", ":q"):
            break
        if command == ":settings":
            controller.open_settings()
            value = click.prompt(
                "Access key (blank to clear)",
                default=controller.settings_panel.credential_input,
                show_default=False,
            )
            controller.save_settings(value)
            continue
        if not line.strip():
            continue

        asyncio.run(controller.handle_key("Enter", line))
        if controller.state is ViewState.IDLE:
            continue
        click.echo(controller.render_state())
        if map_out and controller.state is ViewState.RESULT:
            controller.map_adapter.save(map_out)


@cli.group()
def key() -> None:
    """Manage the stored API access key."""


@key.command("set")
@click.argument("value")
def key_set(value: str) -> None:
    """Store VALUE as the access key."""
    _controller().save_settings(value)


@key.command("clear")
def key_clear() -> None:
    """Forget the stored access key."""
    _controller().save_settings("")


@key.command("show")
def key_show() -> None:
    """Show the stored access key, masked."""
    value = _controller().credential
    click.echo(_mask(value) if value else "No access key stored")


if __name__ == "__main__":
    cli()
