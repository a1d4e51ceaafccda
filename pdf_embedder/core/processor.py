"""
Batch processing of source documents.
File: pdf_embedder/core/processor.py

For each source document, strictly one after another:

1. Match its PDF, TIFF and JPEG companions (plan_source_file)
2. Open it in the host
3. Place every PDF page, then each TIFF, then add each JPEG as a layer
4. Add the optional text layer and keywords
5. Save to the output folder and close

Host failures on a single item are logged and skipped. Failures that
are not HostError (including cancellation) propagate to the caller.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Optional
from rich.console import Console

from pdf_embedder.constants import TEXT_LAYER_COLOR, TEXT_LAYER_POSITION
from pdf_embedder.core.config import EmbedConfig, output_extension
from pdf_embedder.core.diagnostics import RunLog
from pdf_embedder.core.exceptions import HostError, NoKeyMatch
from pdf_embedder.core.file_patterns import SOURCE_FILE_RGX
from pdf_embedder.core.page_counter import count_pages
from pdf_embedder.core.scanner import CandidateFileSet, list_files, strip_extension
from pdf_embedder.host.base import HostApplication
from pdf_embedder.matcher.rules import ExtractionRule
from pdf_embedder.matcher.pattern_matcher import (
    derive_document_key,
    derive_multipage_matcher,
    derive_overlay_matcher,
    filter_matching,
    select_documents,
)

console = Console()


@dataclass
class SourcePlan:
    """Auxiliary files matched to one source document."""
    source: Path
    name: str
    key: Optional[str] = None
    key_error: Optional[NoKeyMatch] = None
    documents: list[Path] = field(default_factory=list)
    tiffs: list[Path] = field(default_factory=list)
    jpegs: list[Path] = field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return bool(self.documents or self.tiffs or self.jpegs)


@dataclass
class RunStats:
    """Counters reported at the end of a run."""
    sources: int = 0
    saved: int = 0
    failed: int = 0
    unmatched_keys: int = 0
    pdf_pages: int = 0
    tiffs: int = 0
    jpegs: int = 0


def find_source_files(folder: Path) -> list[Path]:
    """Source documents (PSD, TIFF, PNG, JPG) in a folder."""
    return list_files(folder, SOURCE_FILE_RGX)


def plan_source_file(source: Path, rule: ExtractionRule,
                     candidates: CandidateFileSet) -> SourcePlan:
    """
    Match a source document against the candidate files.

    The JPEG matcher always exists. PDF and TIFF matching needs a
    document key; without one, key_error is set and those lists stay
    empty.
    """
    name = strip_extension(source.name)
    plan = SourcePlan(source=source, name=name)

    plan.jpegs = filter_matching(candidates.jpegs, derive_overlay_matcher(name, rule))

    try:
        plan.key = derive_document_key(name, rule)
        matcher = derive_multipage_matcher(name, rule)
    except NoKeyMatch as e:
        plan.key_error = e
        return plan

    plan.documents = select_documents(candidates.documents, name, matcher)
    plan.tiffs = filter_matching(candidates.tiffs, matcher)
    return plan


def merge_keywords(existing: list[str], extra: tuple[str, ...]) -> list[str]:
    """Append new keywords to the existing ones, ignoring an empty existing list."""
    if existing and existing[0]:
        return list(existing) + list(extra)
    return list(extra)


def page_layer_name(layer_name: str, override: Optional[str], page: int) -> str:
    """Name for a placed PDF page: "<override or placed name> (Pg 2)"."""
    return f"{override or layer_name} (Pg {page})"


def place_pdf_pages(host: HostApplication, handle: Any, pdf_path: Path,
                    config: EmbedConfig, run_log: RunLog) -> int:
    """Place every page of a PDF; return how many were placed."""
    page_count = count_pages(host, pdf_path, max_pages=config.max_pages)
    placed = 0

    for page in range(1, page_count + 1):
        try:
            layer_name = host.place_embedded(handle, pdf_path, page)
            host.rename_active_layer(handle, page_layer_name(layer_name, config.pdf_layer_name, page))
        except HostError as e:
            run_log.log(f'Error placing page {page} of PDF file, "{pdf_path.name}".', e)
            continue
        placed += 1

    return placed


def place_tiffs(host: HostApplication, handle: Any, tiffs: list[Path],
                config: EmbedConfig, run_log: RunLog) -> int:
    placed = 0
    for tiff_path in tiffs:
        try:
            host.place_embedded(handle, tiff_path)
            if config.tiff_layer_name:
                host.rename_active_layer(handle, config.tiff_layer_name)
        except HostError as e:
            run_log.log(f'Error placing TIFF file, "{tiff_path.name}".', e)
            continue
        placed += 1
    return placed


def add_jpeg_layers(host: HostApplication, handle: Any, jpegs: list[Path],
                    config: EmbedConfig, run_log: RunLog) -> int:
    added = 0
    for jpeg_path in jpegs:
        try:
            host.add_layer_from_file(handle, jpeg_path)
            if config.jpeg_layer_name:
                host.rename_active_layer(handle, config.jpeg_layer_name)
        except HostError as e:
            run_log.log(f'Error opening image file, "{jpeg_path.name}".', e)
            continue
        added += 1
    return added


def _finish_document(host: HostApplication, handle: Any, plan: SourcePlan,
                     config: EmbedConfig, run_log: RunLog):
    """Text layer and keywords; failures here do not stop the save."""
    if config.text_contents:
        try:
            host.add_text_layer(handle, config.text_contents, TEXT_LAYER_COLOR, TEXT_LAYER_POSITION)
            host.center_active_layer(handle)
        except HostError as e:
            run_log.log(f'Error creating text layer for "{plan.source.name}".', e)

    if config.keywords:
        try:
            keywords = merge_keywords(host.get_keywords(handle), config.keywords)
            host.set_keywords(handle, keywords)
        except HostError as e:
            run_log.log(f'Error setting keywords for "{plan.source.name}".', e)


def process_source_file(plan: SourcePlan, config: EmbedConfig, host: HostApplication,
                        run_log: RunLog, stats: RunStats) -> bool:
    """
    Enrich and save one source document.

    Returns:
        True if the document was saved
    """
    try:
        handle = host.open_document(plan.source)
    except HostError as e:
        run_log.log(f'Error opening source file, "{plan.source.name}".', e)
        stats.failed += 1
        return False

    try:
        for pdf_path in plan.documents:
            stats.pdf_pages += place_pdf_pages(host, handle, pdf_path, config, run_log)

        stats.tiffs += place_tiffs(host, handle, plan.tiffs, config, run_log)
        stats.jpegs += add_jpeg_layers(host, handle, plan.jpegs, config, run_log)

        _finish_document(host, handle, plan, config, run_log)

        output_path = config.output_folder / f"{plan.name}.{output_extension(config.output_format)}"
        try:
            host.save_as(handle, output_path, config.output_format)
        except HostError as e:
            run_log.log(f'Error saving file, "{output_path.name}".', e)
            stats.failed += 1
            return False
    finally:
        host.close_document(handle, discard_changes=True)

    stats.saved += 1
    return True


def build_plans(sources: list[Path], rule: ExtractionRule,
                candidates: CandidateFileSet, run_log: RunLog) -> list[SourcePlan]:
    """Match every source; log the ones whose key cannot be derived."""
    plans = []
    for source in sources:
        plan = plan_source_file(source, rule, candidates)
        if plan.key_error is not None and (candidates.documents or candidates.tiffs):
            run_log.log(f'Error creating regular expression for source file, "{source.name}".',
                        plan.key_error)
        plans.append(plan)
    return plans


def process_plans(plans: list[SourcePlan], config: EmbedConfig,
                  host: HostApplication, run_log: RunLog) -> RunStats:
    """Run every plan in order and collect the counters."""
    stats = RunStats(sources=len(plans))
    stats.unmatched_keys = sum(1 for plan in plans if plan.key_error is not None)

    for index, plan in enumerate(plans, 1):
        console.print(f"[cyan]({index}/{len(plans)}) {plan.source.name}[/cyan]")
        process_source_file(plan, config, host, run_log, stats)

    return stats


# End of file #
