from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.progress_bar import ProgressBar
from rich.table import Table

from korje_hasana.domain.amounts import to_decimal


def fundraising_progress(total_donations: Any, goal: int) -> int:
    """
    Percentage of the fundraising goal reached, capped at 100.

    A non-positive goal counts as already met.
    """
    if goal <= 0:
        return 100
    ratio = to_decimal(total_donations) * 100 / Decimal(goal)
    return max(0, min(100, int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))))


def _taka(value: Any) -> str:
    amount = to_decimal(value)
    if amount == amount.to_integral_value():
        return f"৳{int(amount):,}"
    return f"৳{amount:,.2f}"


def print_statistics(
    result: Dict[str, Any],
    goal: int,
    title: str = "কর্জে হাসানা",
    console: Optional[Console] = None,
) -> None:
    """
    Render a get_statistics() result as a rich table with a fundraising bar.

    Error results are printed as a single red line.
    """
    console = console or Console()

    if result.get("status") != "success":
        console.print(f"[red]Could not load statistics:[/red] {result.get('message', 'unknown error')}")
        return

    data = result.get("data") or {}
    donations = data.get("totalDonations", 0)
    progress = fundraising_progress(donations, goal)

    table = Table(title=title, box=box.ROUNDED, show_header=True)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="bold green")

    table.add_row("Applications", f"{data.get('totalApplications', 0):,}")
    table.add_row("Donations", _taka(donations))
    table.add_row("Volunteers", f"{data.get('totalVolunteers', 0):,}")
    table.add_row("Success rate", str(data.get("successRate", "0%")))

    console.print(table)
    console.print(f"Fundraising: {_taka(donations)} of {_taka(goal)} ({progress}%)")
    console.print(
        ProgressBar(total=100, completed=progress, width=40, complete_style="green")
    )
