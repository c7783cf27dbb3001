"""Typer CLI entrypoint."""

from __future__ import annotations

import asyncio

import typer

from buttplug_osc.core import config as gateway_config
from buttplug_osc.core.decoder import decode_message
from buttplug_osc.core.errors import ButtplugOscError, DecodeError
from buttplug_osc.core.pattern_loader import load_patterns
from buttplug_osc.core.service import GatewayService

app = typer.Typer(help="Control https://buttplug.io/ devices via OSC")


def _coerce_arg(raw: str) -> int | float | str:
    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            continue
    return raw


@app.command("serve")
def serve(
    intiface_connect: str = typer.Option(
        gateway_config.DEFAULT_INTIFACE_CONNECT,
        "--intiface-connect",
        envvar="BUTTPLUG_OSC_INTIFACE_CONNECT",
        help="Device server websocket URL",
    ),
    osc_listen: str = typer.Option(
        gateway_config.DEFAULT_OSC_LISTEN,
        "--osc-listen",
        envvar="BUTTPLUG_OSC_LISTEN",
        help="OSC bind address (udp://host:port)",
    ),
    log_level: str = typer.Option(
        gateway_config.DEFAULT_LOG_LEVEL,
        "--log-level",
        envvar="BUTTPLUG_OSC_LOG",
        help="Logging level",
    ),
    reconnect_delay: float = typer.Option(
        gateway_config.DEFAULT_RECONNECT_DELAY_S,
        "--reconnect-delay",
        help="Seconds to wait between connection attempts",
    ),
) -> None:
    """Run the OSC to device-server gateway until interrupted."""
    try:
        config = gateway_config.build_config(
            intiface_connect=intiface_connect,
            osc_listen=osc_listen,
            log_level=log_level,
            reconnect_delay_s=reconnect_delay,
        )
        gateway_config.configure_logging(config.log_level)
        service = GatewayService(config)
        for warning in service.load_warnings:
            typer.echo(f"Warning: {warning}", err=True)
        asyncio.run(service.run())
    except ButtplugOscError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None
    except KeyboardInterrupt:
        typer.echo("Interrupted", err=True)


@app.command("patterns")
def list_patterns() -> None:
    """List available vibration patterns."""
    try:
        loaded = load_patterns()
        for warning in loaded.warnings:
            typer.echo(f"Warning: {warning}", err=True)
        if not loaded.patterns:
            typer.echo("No patterns loaded")
            raise typer.Exit(code=1)
        for index, pattern in sorted(loaded.patterns.items()):
            typer.echo(f"{index}: {pattern.name} ({len(pattern.steps)} steps, {pattern.total_ms} ms)")
    except ButtplugOscError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("decode")
def decode_command(
    address: str,
    args: list[str] | None = typer.Argument(None),
) -> None:
    """Decode an OSC address offline and show the resulting command.

    Arguments are read as int, then float, else string.
    """
    values = [_coerce_arg(raw) for raw in args or []]
    try:
        broadcast = decode_message(address, values)
    except DecodeError as exc:
        typer.echo(f"Rejected: {exc}", err=True)
        raise typer.Exit(code=1) from None
    if broadcast is None:
        typer.echo("Ignored: not a devices address")
        return
    typer.echo(f"target={broadcast.target} command={broadcast.command}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
