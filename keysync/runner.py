"""Batch synchronization of translation files.

A run is split into independent jobs, one per (language, output file). Each
job reads its reference tree and the output file currently on disk,
reconciles them and writes the sorted result back. A failing job is recorded
and the run moves on to the next one.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from .config.settings import Settings
from .errors import ErrorContextManager, KeySyncError
from .extraction.scanner import build_reference_tree, scan_source
from .extraction.transform import transform_tree
from .storage.translation_files import (
    discover_source_files,
    load_reference_file,
    load_translation_file,
    read_current_text,
    serialize_tree,
    write_translation_file,
)
from .tree.diff import KeyDiff
from .tree.keypath import Tree
from .tree.merge import synchronize

logger = structlog.get_logger(__name__)


@dataclass
class SyncJob:
    """One output file to regenerate."""

    language: str
    output_path: Path
    relative_path: str
    copy_values: bool
    reference_path: Optional[Path] = None
    reference_tree: Optional[Tree] = None

    @property
    def reference_label(self) -> str:
        return str(self.reference_path) if self.reference_path is not None else "<source code>"


@dataclass
class JobResult:
    job: SyncJob
    diff: Optional[KeyDiff] = None
    changed: bool = False
    written: bool = False
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.job.language,
            "reference": self.job.reference_label,
            "output": str(self.job.output_path),
            "changed": self.changed,
            "written": self.written,
            "keys": self.diff.to_dict() if self.diff else None,
            "error": self.error,
        }


@dataclass
class SyncReport:
    results: List[JobResult] = field(default_factory=list)
    errors: ErrorContextManager = field(default_factory=ErrorContextManager)

    @property
    def failures(self) -> List[JobResult]:
        return [r for r in self.results if not r.ok]

    @property
    def changed(self) -> List[JobResult]:
        return [r for r in self.results if r.changed]

    def to_dict(self) -> Dict[str, Any]:
        summary: Dict[str, Dict[str, int]] = {}
        for result in self.results:
            lang = summary.setdefault(
                result.job.language,
                {"files": 0, "changed": 0, "new_keys": 0, "stale_keys": 0, "placeholders": 0},
            )
            lang["files"] += 1
            lang["changed"] += int(result.changed)
            if result.diff:
                lang["new_keys"] += len(result.diff.new)
                lang["stale_keys"] += len(result.diff.stale)
                lang["placeholders"] += len(result.diff.placeholder)

        return {
            "generated_at": datetime.now().isoformat(),
            "total_files": len(self.results),
            "changed_files": len(self.changed),
            "failed_files": len(self.failures),
            "files": [r.to_dict() for r in self.results],
            "summary_by_language": summary,
            "errors": self.errors.get_error_stats(),
        }


def _output_path(settings: Settings, language: str, relative_path: str) -> Path:
    return settings.output / language / relative_path


def plan_code_jobs(settings: Settings) -> List[SyncJob]:
    """One job per language, all sharing the tree extracted from source code."""
    texts = scan_source(
        settings.source,
        function_name=settings.function_name,
        patterns=settings.code_patterns,
        skip=settings.output,
    )
    reference_tree = build_reference_tree(texts, transform=settings.transformise)
    logger.info("Extracted strings from source code", source=str(settings.source), strings=len(texts))

    return [
        SyncJob(
            language=language,
            output_path=_output_path(settings, language, settings.code_output_file),
            relative_path=settings.code_output_file,
            copy_values=settings.copy_values_for(language),
            reference_tree=reference_tree,
        )
        for language in settings.languages
    ]


def plan_file_jobs(settings: Settings) -> List[SyncJob]:
    """Jobs for JSON sources found under the source directory.

    With an input file, a skeleton pass fills the default language's copy of
    every source file from that file, and the language pass leaves the
    default language alone.
    """
    files = discover_source_files(
        settings.source,
        pattern=settings.pattern,
        exclude=settings.excluded_names,
        output_dir=settings.output,
    )
    jobs: List[SyncJob] = []

    if settings.input_path is not None:
        for _, relative_path in files:
            jobs.append(SyncJob(
                language=settings.default_language,
                output_path=_output_path(settings, settings.default_language, relative_path),
                relative_path=relative_path,
                copy_values=True,
                reference_path=settings.input_path,
            ))

    for language in settings.languages:
        if settings.input_path is not None and language == settings.default_language:
            continue
        for path, relative_path in files:
            jobs.append(SyncJob(
                language=language,
                output_path=_output_path(settings, language, relative_path),
                relative_path=relative_path,
                copy_values=settings.copy_values_for(language),
                reference_path=path,
            ))

    return jobs


def plan_jobs(settings: Settings) -> List[SyncJob]:
    if settings.scan_code:
        return plan_code_jobs(settings)
    return plan_file_jobs(settings)


def _reference_tree(job: SyncJob, cache: Dict[Path, Tree], transform: bool = False) -> Tree:
    if job.reference_tree is not None:
        return job.reference_tree
    if job.reference_path not in cache:
        tree = load_reference_file(job.reference_path)
        cache[job.reference_path] = transform_tree(tree) if transform else tree
    return cache[job.reference_path]


def run_job(job: SyncJob, settings: Settings, reference_cache: Optional[Dict[Path, Tree]] = None) -> JobResult:
    """Reconcile one output file against its reference tree.

    The output file is always read from disk at this point, never cached:
    the result must be built on top of the latest translations.
    """
    if reference_cache is None:
        reference_cache = {}

    reference_tree = _reference_tree(job, reference_cache, settings.transformise)
    existing_tree = load_translation_file(job.output_path, job.language)

    tree, diff = synchronize(existing_tree, reference_tree, settings.prefix, job.copy_values)
    content = serialize_tree(tree)
    result = JobResult(job=job, diff=diff, changed=content != read_current_text(job.output_path))

    if diff.new:
        logger.info(
            "New translations found",
            reference=job.reference_label,
            output=str(job.output_path),
            language=job.language,
            keys=diff.new,
        )
    if diff.stale:
        logger.info(
            "Removed stale translations",
            output=str(job.output_path),
            language=job.language,
            keys=diff.stale,
        )

    if settings.check:
        if result.changed:
            logger.warning("Translation file is out of date", output=str(job.output_path), language=job.language)
        return result

    if result.changed:
        write_translation_file(job.output_path, tree, job.language)
        result.written = True
    return result


def run_sync(settings: Settings) -> SyncReport:
    """Run every planned job; one failing file never stops the others."""
    report = SyncReport()
    reference_cache: Dict[Path, Tree] = {}

    jobs = plan_jobs(settings)
    if not jobs:
        logger.warning("No translation sources found", source=str(settings.source), pattern=settings.pattern)

    for job in jobs:
        try:
            result = run_job(job, settings, reference_cache)
        except KeySyncError as e:
            report.errors.record_error(e, {"language": job.language, "output": str(job.output_path)})
            result = JobResult(job=job, error=e.to_dict())
        report.results.append(result)

    logger.info(
        "Sync finished",
        files=len(report.results),
        changed=len(report.changed),
        failed=len(report.failures),
        check=settings.check,
    )
    return report


def write_report(report: SyncReport, output_file: Path) -> None:
    """Export the run report to a JSON file."""
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("Sync report exported", file=str(output_file), files=len(report.results))
    except Exception as e:
        logger.error("Failed to export sync report", file=str(output_file), error=str(e))
        raise
