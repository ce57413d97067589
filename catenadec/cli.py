"""Typer CLI entrypoint."""

from __future__ import annotations

import json
import logging

import typer

from catenadec.core.errors import CatenadecError
from catenadec.core.metrics import dew_point, heat_index, heat_index_celsius
from catenadec.core.service import DecoderService

app = typer.Typer(help="Decode Catena 5230 environmental sensor payloads")


def _build_service() -> DecoderService:
    service = DecoderService()
    for warning in service.load_warnings:
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _parse_hex(payload: str) -> bytes:
    try:
        return bytes.fromhex(payload.replace(" ", "").replace(":", ""))
    except ValueError:
        raise typer.BadParameter(f"'{payload}' is not a hex string", param_hint="PAYLOAD") from None


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@app.command("decode")
def decode_payload(
    payload: str = typer.Argument(..., help="Payload as hex, e.g. '50 08 17 80 f8 00'"),
    port: int = typer.Option(1, "--port", "-p", help="LoRaWAN port the payload arrived on"),
    derived: bool = typer.Option(False, "--derived", help="Add tempC, tDewC and tHeatIndexC"),
) -> None:
    """Decode a single payload and print the record as JSON."""
    data = _parse_hex(payload)
    try:
        service = _build_service()
        result = service.decode(port, data)
        if not result.ok:
            typer.echo(f"Error: {result.error}", err=True)
            raise typer.Exit(code=1)
        decoded = service.render(result, derived=derived or None)
        typer.echo(json.dumps(decoded, indent=2))
    except CatenadecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("message")
def decode_message(
    source: typer.FileText = typer.Argument(..., help="JSON message envelope, or '-' for stdin"),
) -> None:
    """Decode a Node-RED/TTN message envelope and print the outbound message."""
    try:
        message = json.load(source)
    except json.JSONDecodeError as exc:
        typer.echo(f"Error: invalid JSON message: {exc}", err=True)
        raise typer.Exit(code=1) from None
    if not isinstance(message, dict):
        typer.echo("Error: message must be a JSON object", err=True)
        raise typer.Exit(code=1)

    try:
        service = _build_service()
        outbound = service.process_message(message)
        if outbound is None:
            typer.echo("Error: message could not be decoded", err=True)
            raise typer.Exit(code=1)
        typer.echo(json.dumps(outbound, indent=2))
    except CatenadecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("dewpoint")
def show_dew_point(
    temperature: float = typer.Argument(..., help="Temperature in Celsius"),
    humidity: float = typer.Argument(..., help="Relative humidity in percent"),
) -> None:
    """Print the dew point in Celsius."""
    typer.echo(f"{dew_point(temperature, humidity):.2f}")


@app.command("heat-index")
def show_heat_index(
    temperature: float = typer.Argument(..., help="Temperature in Fahrenheit"),
    humidity: float = typer.Argument(..., help="Relative humidity in percent"),
    celsius: bool = typer.Option(False, "--celsius", help="Print the result in Celsius"),
) -> None:
    """Print the NWS heat index, or 'not applicable' outside its valid range."""
    try:
        limits = _build_service().settings.heat_index
    except CatenadecError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    compute = heat_index_celsius if celsius else heat_index
    value = compute(temperature, humidity, limits)
    if value is None:
        typer.echo("not applicable")
        return
    typer.echo(f"{value:.2f}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
