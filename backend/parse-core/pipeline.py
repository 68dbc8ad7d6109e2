"""
backend/parse-core/pipeline.py

Runs extraction over many source units.

Each unit is handled on its own: a unit that cannot be parsed, has no
primary declaration, or trips a defect in extraction becomes a
SkipDiagnostic, and the run goes on with the next one.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from cir.model import UnitModel
from cir.nodes import ParseFailure
from errors import SKIP_INTERNAL_ERROR, SKIP_PARSE_ERROR, UnitSkipped
from extractors.assembler import build_unit_model
from registry import LoadResult, load_source
from settings import Settings, load_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SkipDiagnostic:
    unit: str
    reason: str
    detail: str = ""


@dataclass(frozen=True)
class UnitResult:
    unit: str
    model: Optional[UnitModel] = None
    skip: Optional[SkipDiagnostic] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit": self.unit,
            "model": self.model.to_dict() if self.model else None,
            "skip": {"reason": self.skip.reason, "detail": self.skip.detail} if self.skip else None,
        }


@dataclass(frozen=True)
class ExtractionReport:
    results: tuple = ()

    @property
    def models(self) -> List[UnitModel]:
        return [r.model for r in self.results if r.model is not None]

    @property
    def skips(self) -> List[SkipDiagnostic]:
        return [r.skip for r in self.results if r.skip is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "units": [r.to_dict() for r in self.results],
            "models": len(self.models),
            "skipped": len(self.skips),
        }


def _skipped(unit: str, reason: str, detail: str) -> UnitResult:
    return UnitResult(unit=unit, skip=SkipDiagnostic(unit=unit, reason=reason, detail=detail))


def extract_unit(source: LoadResult) -> UnitResult:
    """
    One loaded unit (or its load failure) -> UnitResult. Never raises.
    """
    if isinstance(source, ParseFailure):
        logger.warning(f"Skipping {source.path}: {source.message}")
        return _skipped(source.path, SKIP_PARSE_ERROR, source.message)

    try:
        model = build_unit_model(source)
    except UnitSkipped as e:
        logger.info(f"Skipping {source.path}: {e}")
        return _skipped(source.path, e.reason, e.detail)
    except Exception as e:
        logger.exception(f"Extraction failed for {source.path}")
        return _skipped(source.path, SKIP_INTERNAL_ERROR, f"{type(e).__name__}: {e}")

    logger.info(f"Parsed class: {model.fully_qualified_name}")
    return UnitResult(unit=source.path, model=model)


def _run(
    func: Callable[[T], UnitResult],
    items: Sequence[T],
    max_workers: int,
    preserve_order: bool,
) -> List[UnitResult]:
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        if preserve_order:
            return list(pool.map(func, items))
        futures = [pool.submit(func, item) for item in items]
        return [f.result() for f in as_completed(futures)]


def _report(results: List[UnitResult]) -> ExtractionReport:
    report = ExtractionReport(results=tuple(results))
    logger.info(
        f"Extraction finished: {len(report.models)} model(s), {len(report.skips)} skipped "
        f"of {len(results)} unit(s)"
    )
    return report


def extract_units(
    sources: Iterable[LoadResult],
    max_workers: Optional[int] = None,
    preserve_order: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> ExtractionReport:
    """
    Extract already-loaded units. Arguments left as None come from settings
    (environment) so callers only pass what they want to override.
    """
    if max_workers is None or preserve_order is None:
        settings = settings or load_settings()
        max_workers = settings.max_workers if max_workers is None else max_workers
        preserve_order = settings.preserve_order if preserve_order is None else preserve_order

    return _report(_run(extract_unit, list(sources), max_workers, preserve_order))


def extract_files(
    paths: Iterable[str],
    max_workers: Optional[int] = None,
    preserve_order: Optional[bool] = None,
    settings: Optional[Settings] = None,
) -> ExtractionReport:
    """
    Load and extract each path. Paths are used as given, in the given order;
    files the registry has no adapter for are reported as parse errors.
    """
    settings = settings or load_settings()
    if max_workers is None:
        max_workers = settings.max_workers
    if preserve_order is None:
        preserve_order = settings.preserve_order

    encoding = settings.source_encoding

    def load_and_extract(path: str) -> UnitResult:
        try:
            source = load_source(path, encoding=encoding)
        except Exception as e:
            logger.exception(f"Loading failed for {path}")
            return _skipped(path, SKIP_INTERNAL_ERROR, f"{type(e).__name__}: {e}")
        return extract_unit(source)

    return _report(_run(load_and_extract, list(paths), max_workers, preserve_order))
