"""Command-line entrypoints for running the simulated extraction pipeline."""
from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from .config import DemoSettings, configure_logging, get_settings
from .pipeline import DEFAULT_STAGES
from .scheduler import AsyncioScheduler, ManualScheduler
from .schemas import ExportFormat, LogEntry, ResultRecord, RunMode, SessionSnapshot, Severity
from .session import DemoSession
from .utils import format_amount

app = typer.Typer(add_completion=False, help="Logistics invoice extraction demo")
console = Console()

SEVERITY_STYLES = {
    Severity.INFO: "blue",
    Severity.SUCCESS: "green",
    Severity.FINAL: "bold magenta",
}


def _settings(speed: Optional[float], seed: Optional[int]) -> DemoSettings:
    updates = {}
    if speed is not None:
        updates["time_scale"] = speed
    if seed is not None:
        updates["random_seed"] = seed
    return get_settings().model_copy(update=updates)


def _prepare(session: DemoSession, mode: RunMode, ids: Optional[str]) -> None:
    session.select_mode(mode)
    if ids is not None:
        session.set_custom_input(ids)


def _print_log(entry: LogEntry) -> None:
    style = SEVERITY_STYLES[entry.severity]
    print(f"[dim]{entry.timestamp}[/dim] [{style}]{entry.message}[/{style}]")


def _print_results(results: list[ResultRecord]) -> None:
    table = Table(title="Extraction Results")
    table.add_column("#", justify="right")
    table.add_column("Invoice ID", style="cyan")
    table.add_column("Issuer")
    table.add_column("Amount", justify="right")
    table.add_column("Status", style="green")
    for i, record in enumerate(results):
        table.add_row(str(i), record.id, record.seller.name, record.total_amount_display, record.status)
    console.print(table)


def _print_preview(record: ResultRecord) -> None:
    seller = record.seller
    print(f"[bold]{seller.name.upper()}[/bold]")
    print(seller.address)
    print(f"VAT ID: {seller.tax_id}")
    print(seller.email)
    print(f"\n[bold]INVOICE #{record.id}[/bold]  Date: {record.issue_date}")
    print(f"[dim]Bill to:[/dim] {record.client_name}, {record.client_address}")
    print(f"[dim]Terms:[/dim] {record.metadata.payment_terms_tag}")

    table = Table()
    table.add_column("Description")
    table.add_column("Qty", justify="center")
    table.add_column("Unit Price", justify="right")
    table.add_column("Total", justify="right")
    for item in record.line_items:
        table.add_row(
            item.description,
            str(item.quantity),
            format_amount(item.unit_price, grouping=False),
            format_amount(item.line_total, grouping=False),
        )
    console.print(table)

    meta = record.metadata
    print(f"Subtotal: {meta.subtotal_display}  VAT: {meta.tax_amount_display}  Total: [bold]{record.total_amount_display}[/bold]")
    print(f"[dim]Processed with {meta.extraction_method_tag} at {meta.confidence_display} confidence.[/dim]")


async def _run_live(session: DemoSession, export: Optional[ExportFormat] = None) -> SessionSnapshot:
    """Drive one run on the event loop, echoing log lines as stages fire."""
    done = asyncio.Event()
    printed = 0

    def on_change(snapshot: SessionSnapshot) -> None:
        nonlocal printed
        for entry in snapshot.pipeline.log_stream[printed:]:
            _print_log(entry)
        printed = len(snapshot.pipeline.log_stream)
        if not snapshot.pipeline.is_running and printed:
            done.set()

    unsubscribe = session.subscribe(on_change)
    try:
        session.trigger_run()
        await done.wait()
        if export is not None:
            settled = asyncio.Event()

            def on_export(snapshot: SessionSnapshot) -> None:
                if snapshot.export.notification:
                    settled.set()

            stop_export = session.subscribe(on_export)
            session.trigger_export(export)
            await settled.wait()
            stop_export()
    finally:
        unsubscribe()
    return session.snapshot()


@app.command()
def run(
    mode: RunMode = typer.Option(RunMode.STANDARD, help="standard (sample invoices) or custom (typed ids)"),
    ids: Optional[str] = typer.Option(None, help="Comma-separated invoice ids for custom mode"),
    speed: Optional[float] = typer.Option(None, min=0, help="Delay multiplier; 0 runs instantly"),
    seed: Optional[int] = typer.Option(None, help="Seed for synthesized amounts"),
) -> None:
    """Run the staged extraction narrative and list the results."""
    settings = _settings(speed, seed)
    configure_logging(settings.log_level)
    session = DemoSession(AsyncioScheduler(time_scale=settings.time_scale), settings=settings)
    _prepare(session, mode, ids)
    snapshot = asyncio.run(_run_live(session))
    _print_results(snapshot.pipeline.results)


@app.command()
def preview(
    invoice_id: str = typer.Argument(..., help="Invoice id to open"),
    mode: RunMode = typer.Option(RunMode.STANDARD, help="standard or custom"),
    ids: Optional[str] = typer.Option(None, help="Comma-separated invoice ids for custom mode"),
    seed: Optional[int] = typer.Option(None, help="Seed for synthesized amounts"),
) -> None:
    """Run instantly and print one invoice document."""
    settings = _settings(None, seed)
    scheduler = ManualScheduler()
    session = DemoSession(scheduler, settings=settings)
    _prepare(session, mode, ids)
    session.trigger_run()
    scheduler.run_until_idle()

    record = session.find_result(invoice_id)
    if record is None:
        print(f"[red]No result with id {invoice_id}[/red]")
        raise typer.Exit(code=1)
    session.select_result_row(record)
    _print_preview(session.snapshot().overlay.record)


@app.command()
def export(
    fmt: str = typer.Option("csv", "--format", help="pdf or csv"),
    mode: RunMode = typer.Option(RunMode.STANDARD, help="standard or custom"),
    ids: Optional[str] = typer.Option(None, help="Comma-separated invoice ids for custom mode"),
    speed: Optional[float] = typer.Option(None, min=0, help="Delay multiplier; 0 runs instantly"),
) -> None:
    """Run the pipeline, then simulate saving the results."""
    try:
        export_format = ExportFormat.parse(fmt)
    except ValueError:
        raise typer.BadParameter("format must be pdf or csv", param_hint="--format")
    settings = _settings(speed, None)
    configure_logging(settings.log_level)
    session = DemoSession(AsyncioScheduler(time_scale=settings.time_scale), settings=settings)
    _prepare(session, mode, ids)
    snapshot = asyncio.run(_run_live(session, export=export_format))
    _print_results(snapshot.pipeline.results)
    print(f"[green]{snapshot.export.notification}[/green]")


@app.command()
def stages() -> None:
    """Show the stage schedule."""
    table = Table(title="Pipeline Stages")
    table.add_column("Offset (s)", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Severity")
    table.add_column("Message")
    for stage in DEFAULT_STAGES:
        label = stage.severity.value + (" (terminal)" if stage.terminal else "")
        table.add_row(f"{stage.offset:.1f}", f"{stage.progress}%", label, stage.message)
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
