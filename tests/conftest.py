import os
from pathlib import Path

import pytest

from dvdti.ifo.disc import find_video_ts
from tests.builders import audio_attr, build_pgc, build_vmg, build_vts, subpicture_attr, write_disc


@pytest.fixture
def disc_root() -> Path:
    """Path to a real DVD-Video root for integration tests.

    Uses the DVDTI_TEST_DISC env var; skipped when it is not set.
    """
    env: str | None = os.environ.get("DVDTI_TEST_DISC")
    if not env:
        pytest.skip("DVDTI_TEST_DISC not set")
    p = Path(env)
    try:
        find_video_ts(p)
    except FileNotFoundError:
        pytest.skip(f"No VIDEO_TS.IFO found at {p}")
    return p


@pytest.fixture
def synthetic_disc(tmp_path: Path) -> Path:
    """Two title sets, three titles, written under tmp_path/VIDEO_TS."""
    vmg = build_vmg(title_sets=2, titles=[(1, 1), (1, 2), (2, 1)], chapters=4)
    vts1 = build_vts(
        audio=[audio_attr("en"), audio_attr("fr", channels=2)],
        subpictures=[subpicture_attr("en")],
        pgcs=[
            build_pgc(programs=4, time=(1, 30, 0, 0), audio=[0, 1], subpictures=[(0, 0, 0, 0)]),
            build_pgc(programs=2, time=(0, 5, 10, 0), audio=[0]),
        ],
    )
    vts2 = build_vts(
        audio=[audio_attr("de")],
        pgcs=[build_pgc(programs=1, time=(0, 2, 0, 0), audio=[0])],
    )
    return write_disc(tmp_path, vmg, [vts1, vts2])
