"""Title resolution and disc catalog construction."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from dvdti.analyze.languages import DEFAULT_LANGUAGES, LanguageTable
from dvdti.analyze.titles import resolve_title
from dvdti.ifo.disc import Disc, open_disc
from dvdti.ifo.errors import IfoError
from dvdti.model import DiscCatalog, DiscSummary, Title

log = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_LANGUAGES",
    "LanguageTable",
    "ScanResult",
    "resolve_title",
    "resolve_titles",
    "scan_disc",
    "scan_disc_result",
]


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of :func:`scan_disc_result`: a catalog or the error that stopped it."""

    ok: bool
    catalog: DiscCatalog | None = None
    error: Exception | None = None


def resolve_titles(disc: Disc, languages: LanguageTable = DEFAULT_LANGUAGES) -> list[Title]:
    """Resolve every TT_SRPT entry of an opened disc, in table order."""
    return [
        resolve_title(disc, i, languages) for i in range(disc.vmg.title_search.count)
    ]


def _summarize(disc: Disc) -> DiscSummary:
    vmg = disc.vmg
    return DiscSummary(
        provider_id=vmg.provider_id,
        title_set_count=vmg.number_of_title_sets,
        volume_count=vmg.volume_count,
        volume_number=vmg.volume_number,
        side_id=vmg.side_id,
        version=vmg.version,
    )


def scan_disc(
    root: str | Path,
    languages: LanguageTable | None = None,
    workers: int | None = None,
) -> DiscCatalog:
    """Open the disc at *root* and return its resolved title catalog."""
    disc = open_disc(root, workers=workers)
    titles = resolve_titles(disc, DEFAULT_LANGUAGES if languages is None else languages)
    log.info("Resolved %d title(s) from %s", len(titles), disc.video_ts)
    return DiscCatalog(path=str(root), disc=_summarize(disc), titles=tuple(titles))


def scan_disc_result(
    root: str | Path,
    languages: LanguageTable | None = None,
    workers: int | None = None,
) -> ScanResult:
    """Like :func:`scan_disc`, but report decode and file errors as a result."""
    try:
        catalog = scan_disc(root, languages=languages, workers=workers)
    except (IfoError, OSError) as e:
        log.debug("Scan of %s failed", root, exc_info=True)
        return ScanResult(ok=False, error=e)
    return ScanResult(ok=True, catalog=catalog)
