import asyncio
from typing import Optional

import typer

from ...features.auth.models import User as AuthUser
from ...features.reports import service as report_service
from ...features.reports.date_range import resolve_report_range
from ...core.config import get_settings
from ..db import DBConnection

reports_app = typer.Typer(name="reports", help="Generate reports.")


@reports_app.command("generate")
def generate_report_command(
    username: str = typer.Option(..., help="User to generate the report for."),
    from_: Optional[str] = typer.Option(None, "--from", help="Range start (ISO-8601). Defaults to 30 days before --to."),
    to: Optional[str] = typer.Option(None, "--to", help="Range end (ISO-8601). Defaults to now."),
):
    """Generates a report for one user over a date range."""
    asyncio.run(_generate_report(username, from_, to))


async def _generate_report(username: str, from_: Optional[str], to: Optional[str]):
    report_range = resolve_report_range(
        from_, to, lookback_days=get_settings().report_lookback_days
    )
    async with DBConnection():
        user = await AuthUser.get_or_none(username=username)
        if not user:
            typer.secho(f"Error: User with username '{username}' not found.", fg=typer.colors.RED)
            raise typer.Exit(code=1)

        result = await report_service.generate_report(user, report_range.from_date, report_range.to_date)
        report = result.report
        typer.secho(f"Report {report.public_id} ({report.period}): {report.status.value}", fg=typer.colors.GREEN)
        if report.summary:
            typer.echo(f"  Income:   {report.summary.income:,.2f}")
            typer.echo(f"  Expenses: {report.summary.expenses:,.2f}")
            typer.echo(f"  Balance:  {report.summary.balance:,.2f} (saved {report.summary.savings_rate}%)")
        for insight in report.insights or []:
            typer.echo(f"  - {insight}")


@reports_app.command("run-scheduled")
def run_scheduled_command():
    """Generates last month's report for every user whose report is due."""
    asyncio.run(_run_scheduled())


async def _run_scheduled():
    async with DBConnection():
        processed = await report_service.run_scheduled_reports()
        typer.secho(f"Processed {processed} scheduled report(s).", fg=typer.colors.GREEN)
