"""User interface components - tables, summaries, completion notice."""

from rich.console import Console
from rich.table import Table
from rich.markup import escape

from pdf_embedder.constants import SCRIPT_NAME
from pdf_embedder.core.config import EmbedConfig
from pdf_embedder.core.diagnostics import RunLog
from pdf_embedder.core.processor import SourcePlan, RunStats
from pdf_embedder.core.scanner import CandidateFileSet
from pdf_embedder.matcher.rules import EXTRACTION_RULES, DEFAULT_RULE_INDEX

console = Console()


def display_rules_table():
    """Show the available filename patterns."""
    table = Table(title="Filename Patterns")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Key Expression", style="magenta")
    table.add_column("JPEG Matching", style="green")

    for index, rule in enumerate(EXTRACTION_RULES):
        name = f"{rule.name} (default)" if index == DEFAULT_RULE_INDEX else rule.name
        table.add_row(name, escape(rule.key_expression.pattern), rule.overlay_strategy)

    console.print(table)


def display_candidate_summary(config: EmbedConfig, source_count: int, candidates: CandidateFileSet):
    """One line per folder with the number of files found."""
    console.print(f"[blue]Source:[/blue] {config.source_folder} ({source_count} files)")
    for label, folder, files in (('PDF', config.pdf_folder, candidates.documents),
                                 ('TIFF', config.tiff_folder, candidates.tiffs),
                                 ('JPEG', config.jpeg_folder, candidates.jpegs)):
        if folder is not None:
            console.print(f"[blue]{label}:[/blue] {folder} ({len(files)} files)")
    console.print(f"[blue]Pattern:[/blue] {config.rule.name}  "
                  f"[blue]Output:[/blue] {config.output_folder} ({config.output_format})\n")


def display_match_plan(plans: list[SourcePlan]):
    """Table of matched auxiliary files per source document."""
    table = Table(title="Matched Files")
    table.add_column("Source", style="cyan", no_wrap=True)
    table.add_column("Key", style="magenta")
    table.add_column("PDF", justify="right")
    table.add_column("TIFF", justify="right")
    table.add_column("JPEG", justify="right")

    for plan in plans:
        key = escape(plan.key) if plan.key is not None else "[yellow]no match[/yellow]"
        table.add_row(escape(plan.source.name), key,
                      str(len(plan.documents)), str(len(plan.tiffs)), str(len(plan.jpegs)))

    console.print(table)


def display_run_summary(stats: RunStats, run_log: RunLog):
    console.print(f"\n[green]✓ Saved {stats.saved} of {stats.sources} files[/green] "
                  f"[dim]({stats.pdf_pages} PDF pages, {stats.tiffs} TIFF, {stats.jpegs} JPEG)[/dim]")

    if stats.failed:
        console.print(f"[red]{stats.failed} file(s) could not be processed[/red]")
    if stats.unmatched_keys:
        console.print(f"[yellow]{stats.unmatched_keys} file(s) did not match the filename pattern[/yellow]")
    if run_log.has_entries:
        console.print(f"[yellow]{run_log.count} problem(s) logged to: {run_log.path}[/yellow]")


def notify_done():
    """Single completion notice for the whole run."""
    console.bell()
    console.print(f"[green]{SCRIPT_NAME}: Done![/green]")
