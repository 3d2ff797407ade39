from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import typer

from korje_hasana.backends.abstract import OperationResult
from korje_hasana.config import Settings, get_settings
from korje_hasana.reporter import print_statistics
from korje_hasana.service import KorjeHasanaService, available_backends
from korje_hasana.utils.logging import configure_logging

app = typer.Typer(help="Korje Hasana row-store client.")


def _settings() -> Settings:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    return settings


async def _submit(settings: Settings, kind: str, form: Dict[str, Any]) -> OperationResult:
    async with KorjeHasanaService(settings) as service:
        return await service.gateway.submit(kind, form)


async def _statistics(settings: Settings) -> OperationResult:
    async with KorjeHasanaService(settings) as service:
        return await service.get_statistics()


def _report(result: OperationResult) -> None:
    if result.get("status") == "success":
        typer.echo(result.get("message") or "OK")
        return
    typer.echo(f"Error: {result.get('message')}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    endpoint = settings.sheetdb_base_url if settings.backend_type == "sheetdb" else settings.script_url
    typer.echo(
        f"{settings.app_name} | backend={settings.backend_type} endpoint={endpoint} | "
        f"sheets={settings.applications_sheet},{settings.donations_sheet},{settings.volunteers_sheet} "
        f"timeout={settings.request_timeout_seconds}s policy={settings.success_rate_policy}"
    )
    typer.echo(f"Contact: {settings.contact_phone} / {settings.contact_email}")


@app.command()
def backends() -> None:
    """
    List available backend names for BACKEND_TYPE.
    """
    typer.echo("Available backends: " + ", ".join(available_backends()))


@app.command()
def stats(
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON."),
) -> None:
    """
    Fetch and display totals, fundraising progress and success rate.
    """
    settings = _settings()
    result = asyncio.run(_statistics(settings))
    if as_json:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False, default=str))
    else:
        print_statistics(result, goal=settings.fundraising_goal, title=settings.app_name)
    if result.get("status") != "success":
        raise typer.Exit(code=1)


@app.command()
def apply(
    name: str = typer.Option(..., "--name"),
    phone: str = typer.Option(..., "--phone"),
    address: str = typer.Option(..., "--address"),
    type_: str = typer.Option(..., "--type", help="Loan or aid category."),
    amount: str = typer.Option(..., "--amount"),
    details: str = typer.Option(..., "--details"),
) -> None:
    """
    Submit a loan/aid application.
    """
    form = {
        "name": name,
        "phone": phone,
        "address": address,
        "type": type_,
        "amount": amount,
        "details": details,
    }
    _report(asyncio.run(_submit(_settings(), "application", form)))


@app.command()
def donate(
    type_: str = typer.Option(..., "--type", help="Donation category, e.g. Zakat."),
    amount: str = typer.Option(..., "--amount"),
    name: Optional[str] = typer.Option(None, "--name"),
    phone: Optional[str] = typer.Option(None, "--phone"),
    method: Optional[str] = typer.Option(None, "--method", help="bKash, Nagad, bank, cash..."),
    details: Optional[str] = typer.Option(None, "--details"),
) -> None:
    """
    Record a donation. Name and phone are optional.
    """
    form = {
        "type": type_,
        "amount": amount,
        "name": name,
        "phone": phone,
        "method": method,
        "details": details,
    }
    _report(asyncio.run(_submit(_settings(), "donation", form)))


@app.command()
def volunteer(
    name: str = typer.Option(..., "--name"),
    phone: str = typer.Option(..., "--phone"),
    address: str = typer.Option(..., "--address"),
    occupation: str = typer.Option(..., "--occupation"),
    help_types: List[str] = typer.Option(..., "--help-type", help="Repeat for each kind of help."),
    hours: str = typer.Option(..., "--hours"),
    extra: Optional[str] = typer.Option(None, "--extra"),
) -> None:
    """
    Register a volunteer.
    """
    form = {
        "name": name,
        "phone": phone,
        "address": address,
        "occupation": occupation,
        "helpTypes": help_types,
        "hours": hours,
        "extra": extra,
    }
    _report(asyncio.run(_submit(_settings(), "volunteer", form)))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
