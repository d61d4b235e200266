"""Locate a VIDEO_TS directory and decode its VMG and title set IFO files."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dvdti.ifo.vmg import VmgDescriptor, parse_vmg
from dvdti.ifo.vts import VtsDescriptor, parse_vts

log = logging.getLogger(__name__)

VIDEO_TS_DIR = "VIDEO_TS"
VMG_IFO_NAME = "VIDEO_TS.IFO"


@dataclass(frozen=True, slots=True)
class Disc:
    root: Path
    video_ts: Path
    vmg: VmgDescriptor
    vts: tuple[VtsDescriptor, ...]  # index 0 is VTS_01_0.IFO

    @property
    def vts_count(self) -> int:
        return len(self.vts)


def vts_ifo_name(title_set: int) -> str:
    """Return the IFO file name of a 1-based title set, e.g. ``VTS_01_0.IFO``."""
    return f"VTS_{title_set:02d}_0.IFO"


def vts_vob_names(title_set: int, parts: int = 9) -> list[str]:
    """Return the candidate title VOB names of a title set (``VTS_nn_1..9.VOB``).

    ``VTS_nn_0.VOB`` holds the menus and is not included.
    """
    return [f"VTS_{title_set:02d}_{i}.VOB" for i in range(1, parts + 1)]


def _find_child(directory: Path, name: str) -> Path | None:
    """Case-insensitive lookup of *name* inside *directory*."""
    exact = directory / name
    if exact.exists():
        return exact
    wanted = name.lower()
    for child in directory.iterdir():
        if child.name.lower() == wanted:
            return child
    return None


def find_video_ts(root: Union[str, Path]) -> Path:
    """Resolve *root* to the directory holding ``VIDEO_TS.IFO``.

    *root* may be the disc root (containing ``VIDEO_TS/``) or the
    ``VIDEO_TS`` directory itself.
    """
    p = Path(root)
    if not p.is_dir():
        raise FileNotFoundError(f"{p} is not a directory")
    # Already the VIDEO_TS dir
    if _find_child(p, VMG_IFO_NAME) is not None:
        return p
    sub = _find_child(p, VIDEO_TS_DIR)
    if sub is not None and sub.is_dir() and _find_child(sub, VMG_IFO_NAME) is not None:
        return sub
    raise FileNotFoundError(
        f"Cannot find DVD-Video structure at {p}: "
        f"expected {VMG_IFO_NAME} (or {VIDEO_TS_DIR}/{VMG_IFO_NAME})"
    )


def _open_vts(video_ts: Path, title_set: int) -> VtsDescriptor:
    path = _find_child(video_ts, vts_ifo_name(title_set))
    if path is None:
        raise FileNotFoundError(f"Missing {vts_ifo_name(title_set)} in {video_ts}")
    log.debug("Parsing %s", path.name)
    return parse_vts(path, title_set=title_set)


def open_disc(root: Union[str, Path], workers: int | None = None) -> Disc:
    """Decode ``VIDEO_TS.IFO`` and every ``VTS_nn_0.IFO`` it references.

    With *workers* > 1 the title set files are decoded in a thread pool; the
    returned tuple is always in title set order.
    """
    video_ts = find_video_ts(root)
    vmg_path = _find_child(video_ts, VMG_IFO_NAME) or video_ts / VMG_IFO_NAME
    vmg = parse_vmg(vmg_path)

    numbers = range(1, vmg.number_of_title_sets + 1)
    if workers and workers > 1 and len(numbers) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            vts = tuple(pool.map(lambda n: _open_vts(video_ts, n), numbers))
    else:
        vts = tuple(_open_vts(video_ts, n) for n in numbers)

    log.info("Opened %s: %d title set(s)", video_ts, len(vts))
    return Disc(root=Path(root), video_ts=video_ts, vmg=vmg, vts=vts)
