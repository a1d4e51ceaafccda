"""Command-line interface for embedding PDF pages into matching source documents."""

import sys
import signal
import argparse

from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.prompt import Prompt

from pdf_embedder._version import __version__
from pdf_embedder.constants import OUTPUT_FORMATS, DEFAULT_OUTPUT_FORMAT
from pdf_embedder.core.config import EmbedConfig, config_from_args, validate_config
from pdf_embedder.core.diagnostics import RunLog
from pdf_embedder.core.exceptions import UserCancelled
from pdf_embedder.core.page_counter import DEFAULT_MAX_PAGES
from pdf_embedder.core.processor import RunStats, build_plans, find_source_files, process_plans
from pdf_embedder.core.scanner import scan_candidates
from pdf_embedder.host import DEFAULT_HOST, HostApplication, load_host
from pdf_embedder.matcher.rules import rule_names, get_default_rule
from pdf_embedder.ui import (
    display_rules_table,
    display_candidate_summary,
    display_match_plan,
    display_run_summary,
    notify_done,
)


console = Console()

EXIT_ERROR = 1
EXIT_CANCELLED = 130    # Standard exit code for Ctrl+C


def setup_signal_handlers():
    """Exit quietly on Ctrl+C; cancelling is not an error."""
    def signal_handler(sig, frame):
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, signal_handler)


epilog_for_argparse = """
How files are matched (source "1234567_001.psd"):
    PDF       --pdf-folder     names starting with "1234567_001" (an exact
                               "1234567_001.pdf" wins); every page is placed
    TIFF      --tiff-folder    names starting with "1234567_001"; placed embedded
    JPEG      --jpeg-folder    "1234567_001*.jpg"; added as a layer
                               (Cacique: the 10 characters after the first "_")

    PDF and TIFF matching requires the name to fit the --pattern; files that
    do not are logged and only get their JPEG layers.

Examples:
    %(prog)s ./psd --output ./out --pdf-folder ./pdf --pattern "Loft|Ann"
    %(prog)s ./psd --output ./out --jpeg-folder ./swatches --pattern Cacique --file-type TIFF
    %(prog)s ./psd --output ./out --pdf-folder ./pdf --keyword SS21 --text-layer "FOR REVIEW"
    %(prog)s --list-patterns

Note: No short arguments are provided to ensure clarity and prevent accidents.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="embed-pdf-pages",
        description="Embed PDF Pages - place PDF pages and TIFF/JPEG files into their corresponding source files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog_for_argparse
    )

    parser.add_argument('source_folder', type=Path, nargs='?',
        help='Folder of source files (PSD, TIFF, PNG, JPG). Asked for if omitted')

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}',
        help='Show program version and exit')
    parser.add_argument('--list-patterns', action='store_true',
        help='Show the available filename patterns and exit')

    # Input folders
    inputs = parser.add_argument_group('input folders')
    inputs.add_argument('--pdf-folder', type=Path, metavar='FOLDER',
        help='Folder of PDF files whose pages are placed')
    inputs.add_argument('--tiff-folder', type=Path, metavar='FOLDER',
        help='Folder of TIFF files placed as embedded objects')
    inputs.add_argument('--jpeg-folder', type=Path, metavar='FOLDER',
        help='Folder of JPEG files added as layers')
    inputs.add_argument('--pattern', default=get_default_rule().name, metavar='NAME',
        help=f'Filename pattern: {", ".join(rule_names())} (default: {get_default_rule().name})')

    # Layer naming
    naming = parser.add_argument_group('layer names (leave out to use the file name)')
    naming.add_argument('--pdf-layer-name', metavar='NAME',
        help='Layer name for PDF pages (" (Pg N)" is appended)')
    naming.add_argument('--tiff-layer-name', metavar='NAME',
        help='Layer name for placed TIFF files')
    naming.add_argument('--jpeg-layer-name', metavar='NAME',
        help='Layer name for JPEG layers')

    # Output
    output = parser.add_argument_group('output')
    output.add_argument('--output', type=Path, metavar='FOLDER',
        help='Output folder. Asked for if omitted')
    output.add_argument('--file-type', choices=list(OUTPUT_FORMATS), default=DEFAULT_OUTPUT_FORMAT,
        help=f'Output file type (default: {DEFAULT_OUTPUT_FORMAT})')
    output.add_argument('--keyword', action='append', metavar='KEYWORD',
        help='Keyword added to the document metadata (can be used multiple times)')
    output.add_argument('--text-layer', metavar='TEXT',
        help='Add a centered text layer with this text')

    # Processing
    processing = parser.add_argument_group('processing')
    processing.add_argument('--max-pages', type=int, default=DEFAULT_MAX_PAGES, metavar='N',
        help=f'Highest PDF page number probed when counting pages (default: {DEFAULT_MAX_PAGES})')
    processing.add_argument('--host', default=DEFAULT_HOST, metavar='MODULE:CLASS',
        help='Host application adapter (default: preview, which changes no files)')
    processing.add_argument('--no-log', action='store_true',
        help='Do not write the diagnostic log file')
    processing.add_argument('--no-notify', action='store_true',
        help='No completion notice')

    return parser


def ask_for_folder(label: str) -> Path:
    """
    Prompt for a required folder.

    Raises:
        UserCancelled: On Ctrl+C, end of input, or an empty answer
    """
    try:
        answer = Prompt.ask(f"Choose {label} folder")
    except (KeyboardInterrupt, EOFError):
        raise UserCancelled(f"No {label} folder chosen") from None

    if not answer or not answer.strip():
        raise UserCancelled(f"No {label} folder chosen")
    return Path(answer.strip())


def fill_missing_folders(args: argparse.Namespace) -> argparse.Namespace:
    """Ask for the source and output folders when not given on the command line."""
    if args.source_folder is None:
        args.source_folder = ask_for_folder('source')
    if args.output is None:
        args.output = ask_for_folder('output')
    return args


def run_embed(config: EmbedConfig, host: HostApplication, run_log: RunLog) -> Optional[RunStats]:
    """
    Process every source file of a run.

    Returns:
        Run counters, or None when the source folder has no files
    """
    sources = find_source_files(config.source_folder)
    if not sources:
        console.print(f"[yellow]No Source files found in folder: {config.source_folder}[/yellow]")
        return None

    candidates = scan_candidates(config.pdf_folder, config.tiff_folder, config.jpeg_folder)
    display_candidate_summary(config, len(sources), candidates)

    plans = build_plans(sources, config.rule, candidates, run_log)
    display_match_plan(plans)

    return process_plans(plans, config, host, run_log)


def main(argv: Optional[list[str]] = None):
    """
    Main entry point for Embed PDF Pages.

    Design note: only long arguments (--flag) are provided, and a
    cancelled prompt or Ctrl+C ends the run without an error message.
    """
    setup_signal_handlers()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_patterns:
        display_rules_table()
        return

    try:
        args = fill_missing_folders(args)
    except UserCancelled:
        sys.exit(EXIT_CANCELLED)

    try:
        config = config_from_args(args)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(EXIT_ERROR)

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        console.print(f"[red]Error: {error_msg}[/red]")
        sys.exit(EXIT_ERROR)

    try:
        host = load_host(config.host)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(EXIT_ERROR)

    run_log = RunLog(config.log_folder, enabled=config.log_enabled,
                     host_description=host.describe())
    try:
        stats = run_embed(config, host, run_log)
    except (UserCancelled, KeyboardInterrupt):
        sys.exit(EXIT_CANCELLED)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(EXIT_ERROR)
    finally:
        run_log.close()

    if stats is None:
        return

    display_run_summary(stats, run_log)
    if config.notify_when_done:
        notify_done()


if __name__ == '__main__':
    main()
