"""Shared test-data builders for dvdti tests.

Synthetic IFO images place the first table (TT_SRPT or VTS_PGCI) at
sector 1, directly after the 2048-byte header block.
"""

from __future__ import annotations

import struct
from pathlib import Path

from dvdti.ifo.disc import Disc, vts_ifo_name
from dvdti.ifo.pgc import PGC_SIZE
from dvdti.ifo.reader import DVD_BLOCK_LEN, BinaryReader
from dvdti.ifo.vmg import parse_vmg
from dvdti.ifo.vts import parse_vts

VMG_MAGIC = b"DVDVIDEO-VMG"
VTS_MAGIC = b"DVDVIDEO-VTS"

# aspect codes as stored in the video attribute byte
ASPECT_4_3 = 0
ASPECT_16_9 = 3


def to_bcd(value: int) -> int:
    return ((value // 10) << 4) | (value % 10)


def video_attr(
    *,
    aspect: int = ASPECT_4_3,
    standard: int = 0,
    coding: int = 1,
    letterbox_allowed: bool = True,
    pan_scan_allowed: bool = True,
    cc: bool = False,
    resolution: int = 0,
    letterboxed: bool = False,
    film: bool = False,
) -> bytes:
    """Build a 2-byte video attribute record."""
    b0 = (coding << 6) | (standard << 4) | (aspect << 2)
    if not pan_scan_allowed:
        b0 |= 0x02
    if not letterbox_allowed:
        b0 |= 0x01
    b1 = resolution << 3
    if cc:
        b1 |= 0xC0
    if letterboxed:
        b1 |= 0x04
    if film:
        b1 |= 0x01
    return bytes([b0, b1])


def audio_attr(
    lang: str = "en",
    *,
    coding: int = 0,
    channels: int = 6,
    lang_type: int = 1,
    multichannel: bool = False,
    app_mode: int = 0,
    quantization: int = 0,
    sample_rate: int = 0,
    code_extension: int = 0,
    app_info: int = 0,
) -> bytes:
    """Build an 8-byte audio attribute record."""
    b0 = (coding << 5) | (lang_type << 2) | app_mode
    if multichannel:
        b0 |= 0x10
    b1 = (quantization << 6) | (sample_rate << 4) | (channels - 1)
    return bytes([b0, b1]) + lang.encode("latin-1").ljust(2, b"\x00") + bytes(
        [0, code_extension, 0, app_info]
    )


def subpicture_attr(
    lang: str = "en",
    *,
    lang_type: int = 1,
    coding: int = 0,
    code_extension: int = 0,
) -> bytes:
    """Build a 6-byte subpicture attribute record."""
    b0 = (coding << 5) | lang_type
    return bytes([b0, 0]) + lang.encode("latin-1").ljust(2, b"\x00") + bytes([0, code_extension])


def build_pgc(
    *,
    programs: int = 1,
    cells: int = 1,
    time: tuple[int, int, int, int] = (0, 0, 0, 0),
    frame_rate_code: int = 3,
    audio: list[int | None] | None = None,
    subpictures: list[tuple[int, int, int, int] | None] | None = None,
) -> bytes:
    """Build a program chain.

    *audio* lists the logical stream per control slot (``None`` = unavailable);
    *subpictures* lists ``(4x3, wide, letterbox, pan_scan)`` stream numbers.
    """
    buf = bytearray(PGC_SIZE)
    buf[2] = programs
    buf[3] = cells
    h, m, s, f = time
    buf[4:8] = bytes([to_bcd(h), to_bcd(m), to_bcd(s), (frame_rate_code << 6) | to_bcd(f)])
    for slot, stream in enumerate(audio or []):
        if stream is not None:
            buf[0x0C + slot * 2] = 0x80 | stream
    for slot, streams in enumerate(subpictures or []):
        if streams is not None:
            s4x3, wide, letterbox, pan_scan = streams
            off = 0x1C + slot * 4
            buf[off : off + 4] = bytes([0x80 | s4x3, wide, letterbox, pan_scan])
    return bytes(buf)


def build_vmg(
    *,
    title_sets: int = 1,
    titles: list[tuple[int, int]] | None = None,
    chapters: int = 1,
    angles: int = 1,
    provider: str = "DVDTI TEST",
    magic: bytes = VMG_MAGIC,
) -> bytes:
    """Build a VIDEO_TS.IFO image; *titles* is a list of ``(vts, vts_title)``."""
    titles = titles if titles is not None else [(1, 1)]
    buf = bytearray(DVD_BLOCK_LEN * 2)
    buf[0:12] = magic
    buf[0x21] = 0x11
    struct.pack_into(">H", buf, 0x26, 1)
    struct.pack_into(">H", buf, 0x28, 1)
    struct.pack_into(">H", buf, 0x3E, title_sets)
    provider_bytes = provider.encode("latin-1")[:32]
    buf[0x40 : 0x40 + len(provider_bytes)] = provider_bytes
    struct.pack_into(">I", buf, 0xC4, 1)  # TT_SRPT sector
    buf[0x100:0x102] = video_attr()

    table = DVD_BLOCK_LEN
    struct.pack_into(">HHI", buf, table, len(titles), 0, 8 + 12 * len(titles) - 1)
    for i, (vts, vts_title) in enumerate(titles):
        struct.pack_into(
            ">BBHHBBI", buf, table + 8 + i * 12, 0x3C, angles, chapters, 0, vts, vts_title, 0
        )
    return bytes(buf)


def build_vts(
    *,
    video: bytes | None = None,
    audio: list[bytes] | None = None,
    subpictures: list[bytes] | None = None,
    pgcs: list[bytes] | None = None,
    entry_titles: list[int | None] | None = None,
    category: int = 0,
    magic: bytes = VTS_MAGIC,
) -> bytes:
    """Build a VTS_nn_0.IFO image.

    *entry_titles* gives the title number of each PGC flagged as entry PGC
    (``None`` leaves the PGC unflagged); by default PGC *i* is title *i + 1*.
    """
    audio = audio or []
    subpictures = subpictures or []
    pgcs = pgcs if pgcs is not None else [build_pgc()]
    if entry_titles is None:
        entry_titles = list(range(1, len(pgcs) + 1))

    buf = bytearray(DVD_BLOCK_LEN * 2)
    buf[0:12] = magic
    buf[0x21] = 0x11
    struct.pack_into(">I", buf, 0x22, category)
    struct.pack_into(">I", buf, 0xCC, 1)  # VTS_PGCI sector
    buf[0x100:0x102] = video_attr()
    buf[0x200:0x202] = video if video is not None else video_attr()
    struct.pack_into(">H", buf, 0x202, len(audio))
    for i, rec in enumerate(audio):
        buf[0x204 + i * 8 : 0x204 + (i + 1) * 8] = rec
    struct.pack_into(">H", buf, 0x254, len(subpictures))
    for i, rec in enumerate(subpictures):
        buf[0x256 + i * 6 : 0x256 + (i + 1) * 6] = rec

    table = DVD_BLOCK_LEN
    first_pgc = 8 + 8 * len(pgcs)
    end = first_pgc + PGC_SIZE * len(pgcs) - 1
    struct.pack_into(">HHI", buf, table, len(pgcs), 0, end)
    for i, pgc in enumerate(pgcs):
        title = entry_titles[i]
        category_byte = 0x80 | title if title is not None else 0
        pgc_offset = first_pgc + i * PGC_SIZE
        struct.pack_into(">BBHI", buf, table + 8 + i * 8, category_byte, 0, 0, pgc_offset)
        buf[table + pgc_offset : table + pgc_offset + PGC_SIZE] = pgc
    return bytes(buf)


def build_disc(vmg: bytes, vts: list[bytes], root: str | Path = "/disc") -> Disc:
    """Decode in-memory images into a Disc without touching the filesystem."""
    return Disc(
        root=Path(root),
        video_ts=Path(root) / "VIDEO_TS",
        vmg=parse_vmg(BinaryReader(vmg)),
        vts=tuple(parse_vts(BinaryReader(data), title_set=i + 1) for i, data in enumerate(vts)),
    )


def write_disc(
    root: Path,
    vmg: bytes,
    vts: list[bytes],
    *,
    subdir: str | None = "VIDEO_TS",
    lower_case: bool = False,
) -> Path:
    """Write IFO images under *root* the way they sit on a disc."""
    video_ts = root / subdir if subdir else root
    video_ts.mkdir(parents=True, exist_ok=True)
    names = ["VIDEO_TS.IFO"] + [vts_ifo_name(i + 1) for i in range(len(vts))]
    for name, data in zip(names, [vmg, *vts]):
        if lower_case:
            name = name.lower()
        (video_ts / name).write_bytes(data)
    return root
