"""
Demo data seeding script for the Korje Hasana row-store.

Generates deterministic pseudo-random applications, donations and volunteer
registrations and submits them through the service, one row per call. Point it
at a scratch sheet: every run appends new rows.
"""

from __future__ import annotations

import asyncio
import json
import random
import sys
import time
from typing import Any, Dict, List, Tuple

import typer

from korje_hasana.config import get_settings
from korje_hasana.domain.models import RecordKind
from korje_hasana.service import KorjeHasanaService
from korje_hasana.utils.logging import configure_logging

app = typer.Typer(help="Generate demo submissions and write them to the configured row-store.")

_NAMES = ["রহিম", "করিম", "ফাতেমা", "আয়েশা", "Abdul", "Nasrin", "Jamal", "Sumaiya"]
_VILLAGES = ["Badalgachi", "Naogaon", "Mohadevpur", "Patnitala", "Dhamoirhat"]
_LOAN_TYPES = ["Education", "Medical", "Business", "Agriculture"]
_DONATION_TYPES = ["Zakat", "Sadaqah", "Loan fund", "General"]
_METHODS = ["bKash", "Nagad", "Bank", "Cash"]
_HELP = ["Field visits", "Accounting", "Teaching", "Fundraising", "Social media"]


def _phone(rng: random.Random) -> str:
    return "01" + rng.choice("3456789") + "".join(rng.choice("0123456789") for _ in range(8))


def _generate_forms(
    applications: int, donations: int, volunteers: int, seed: int
) -> List[Tuple[RecordKind, Dict[str, Any]]]:
    rng = random.Random(seed)
    forms: List[Tuple[RecordKind, Dict[str, Any]]] = []

    for _ in range(applications):
        forms.append(
            (
                RecordKind.APPLICATION,
                {
                    "name": rng.choice(_NAMES),
                    "phone": _phone(rng),
                    "address": rng.choice(_VILLAGES),
                    "type": rng.choice(_LOAN_TYPES),
                    "amount": f"{rng.randrange(2_000, 50_000, 500):,}",
                    "details": "Demo application",
                },
            )
        )
    for _ in range(donations):
        anonymous = rng.random() < 0.3
        forms.append(
            (
                RecordKind.DONATION,
                {
                    "name": "" if anonymous else rng.choice(_NAMES),
                    "phone": "" if anonymous else _phone(rng),
                    "type": rng.choice(_DONATION_TYPES),
                    "amount": f"৳{rng.randrange(100, 20_000, 50):,}",
                    "method": rng.choice(_METHODS),
                },
            )
        )
    for _ in range(volunteers):
        forms.append(
            (
                RecordKind.VOLUNTEER,
                {
                    "name": rng.choice(_NAMES),
                    "phone": _phone(rng),
                    "address": rng.choice(_VILLAGES),
                    "occupation": rng.choice(["Student", "Teacher", "Farmer", "Shopkeeper"]),
                    "helpTypes": rng.sample(_HELP, k=rng.randint(1, 3)),
                    "hours": str(rng.randint(2, 12)),
                },
            )
        )
    return forms


async def _submit_all(forms: List[Tuple[RecordKind, Dict[str, Any]]]) -> int:
    failures = 0
    async with KorjeHasanaService(get_settings()) as service:
        for kind, form in forms:
            result = await service.gateway.submit(kind, form)
            if result["status"] != "success":
                failures += 1
                typer.echo(f"{kind.value}: {result.get('message')}", err=True)
    return failures


@app.command()
def main(
    applications: int = typer.Option(5, "--applications", "-a", min=0),
    donations: int = typer.Option(10, "--donations", "-d", min=0),
    volunteers: int = typer.Option(3, "--volunteers", "-v", min=0),
    seed: int = typer.Option(42, "--seed", help="Random seed for deterministic output."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the forms as JSON; write nothing."),
) -> None:
    """
    Generate demo submissions and write each one as a row.
    """
    forms = _generate_forms(applications, donations, volunteers, seed)

    if dry_run:
        typer.echo(
            json.dumps([{"kind": k.value, **f} for k, f in forms], indent=2, ensure_ascii=False)
        )
        return

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    typer.echo(f"Submitting {len(forms)} rows to backend={settings.backend_type}")
    start = time.perf_counter()
    failures = asyncio.run(_submit_all(forms))
    typer.echo(
        f"Done in {time.perf_counter() - start:.2f}s: "
        f"{len(forms) - failures} written, {failures} failed."
    )
    if failures:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
