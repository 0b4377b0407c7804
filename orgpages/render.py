"""
Terminal rendering for orgpages.

Pages themselves are built in pages.py; this module prints the run
summary for whoever is watching the job.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from rich.markup import escape

from .pipeline import SiteResult

console = Console()


def render_summary(result: SiteResult) -> None:
    """
    Render per-category counts for both listings as a table.

    Args:
        result: Outcome of a pipeline run
    """
    table = Table(
        title="Workshop Listings",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Category", style="cyan")
    table.add_column("All", justify="right", style="green")
    table.add_column("Featured", justify="right", style="yellow")

    all_counts = result.all_grouping.counts()
    featured_counts = result.featured_grouping.counts()

    for category in result.all_grouping.taxonomy:
        table.add_row(
            category.label,
            str(all_counts.get(category.key, 0)),
            str(featured_counts.get(category.key, 0)),
        )

    console.print(table)
    print_run_summary(result)


def print_run_summary(result: SiteResult) -> None:
    """Print repository totals and the pages written."""
    enrichment = result.enrichment

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  Repositories listed: {result.listed}")
    console.print(f"  Enriched: {len(enrichment.repositories)}")

    if enrichment.skipped:
        console.print(f"  [dim]Without description: {len(enrichment.skipped)}[/dim]")
    if enrichment.failed:
        console.print(f"  [red]Failed: {len(enrichment.failed)}[/red]")
        for name, error in enrichment.failed.items():
            console.print(f"    [red]✗[/red] {escape(name)}: {escape(error)}")

    for name, path in result.written.items():
        console.print(f"  [green]✓[/green] {escape(name)} → {escape(str(path))}")
