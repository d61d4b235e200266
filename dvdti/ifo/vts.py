"""Parser for DVD-Video title set information files, VTS_nn_0.IFO."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from dvdti.ifo.attributes import (
    AudioAttributes,
    SubpictureAttributes,
    VideoAttributes,
    parse_audio_table,
    parse_subpicture_attributes,
    parse_subpicture_table,
    parse_video_attributes,
)
from dvdti.ifo.pgc import ProgramChainIndex, parse_pgci
from dvdti.ifo.reader import DVD_BLOCK_LEN, BinaryReader
from dvdti.ifo.vmg import check_magic, parse_version

log = logging.getLogger(__name__)

VTS_MAGIC = b"DVDVIDEO-VTS"

AUDIO_STREAM_SLOTS = 8
SUBPICTURE_STREAM_SLOTS = 32

# ---------------------------------------------------------------------------
# VTSI_MAT byte offsets
# ---------------------------------------------------------------------------

_LAST_SECTOR_VTS = 0x0C
_LAST_SECTOR_IFO = 0x1C
_VERSION = 0x21
_CATEGORY = 0x22
_VTSI_MAT_END = 0x80
_MENU_VOB_SECTOR = 0xC0
_TITLE_VOB_SECTOR = 0xC4
_SECTOR_POINTERS = 0xC8  # VTS_PTT_SRPT .. VTS_VOBU_ADMAP, 8 × u32
_MENU_VIDEO_ATTR = 0x100
_MENU_AUDIO_COUNT = 0x102
_MENU_AUDIO_ATTR = 0x104
_MENU_SUBPICTURE_COUNT = 0x154
_MENU_SUBPICTURE_ATTR = 0x156
_TITLE_VIDEO_ATTR = 0x200
_TITLE_AUDIO_COUNT = 0x202
_TITLE_AUDIO_ATTR = 0x204
_TITLE_SUBPICTURE_COUNT = 0x254
_TITLE_SUBPICTURE_ATTR = 0x256

_CATEGORY_KARAOKE = 1


@dataclass(frozen=True, slots=True)
class VtsSectorPointers:
    """Start sectors of the VTS tables, relative to the IFO file."""

    vts_ptt_srpt: int
    vts_pgci: int
    vtsm_pgci_ut: int
    vts_tmapti: int
    vtsm_c_adt: int
    vtsm_vobu_admap: int
    vts_c_adt: int
    vts_vobu_admap: int


@dataclass(frozen=True, slots=True)
class VtsDescriptor:
    """Decoded contents of one ``VTS_nn_0.IFO``."""

    title_set: int  # 1-based nn of VTS_nn_0.IFO, 0 if unknown
    identifier: str
    last_sector_vts: int
    last_sector_ifo: int
    version: str
    category: int
    vtsi_mat_end: int
    menu_vob_sector: int
    title_vob_sector: int
    pointers: VtsSectorPointers
    menu_video: VideoAttributes
    menu_audio_count: int
    menu_audio: tuple[AudioAttributes, ...]
    menu_subpicture_count: int
    menu_subpicture: SubpictureAttributes
    title_video: VideoAttributes
    title_audio_count: int
    title_audio: tuple[AudioAttributes, ...]
    title_subpicture_count: int
    title_subpicture: tuple[SubpictureAttributes, ...]
    pgci: ProgramChainIndex

    @property
    def is_karaoke(self) -> bool:
        return self.category == _CATEGORY_KARAOKE


def parse_vts(source: Union[BinaryReader, str, Path], title_set: int = 0) -> VtsDescriptor:
    """Parse a ``VTS_nn_0.IFO`` file and return a :class:`VtsDescriptor`."""
    if isinstance(source, BinaryReader):
        return _parse_vts_reader(source, title_set)
    path = Path(source)
    with BinaryReader(path) as r:
        return _parse_vts_reader(r, title_set)


def _parse_vts_reader(r: BinaryReader, title_set: int) -> VtsDescriptor:
    identifier = check_magic(r, VTS_MAGIC, "VTS_nn_0.IFO")

    r.seek(_SECTOR_POINTERS)
    pointers = VtsSectorPointers(
        vts_ptt_srpt=r.u32(),
        vts_pgci=r.u32(),
        vtsm_pgci_ut=r.u32(),
        vts_tmapti=r.u32(),
        vtsm_c_adt=r.u32(),
        vtsm_vobu_admap=r.u32(),
        vts_c_adt=r.u32(),
        vts_vobu_admap=r.u32(),
    )

    # ── menu attributes ──
    r.seek(_MENU_VIDEO_ATTR)
    menu_video = parse_video_attributes(r)
    r.seek(_MENU_AUDIO_ATTR)
    menu_audio = parse_audio_table(r, AUDIO_STREAM_SLOTS)
    r.seek(_MENU_SUBPICTURE_ATTR)
    menu_subpicture = parse_subpicture_attributes(r)

    # ── title attributes ──
    r.seek(_TITLE_VIDEO_ATTR)
    title_video = parse_video_attributes(r)
    r.seek(_TITLE_AUDIO_ATTR)
    title_audio = parse_audio_table(r, AUDIO_STREAM_SLOTS)
    r.seek(_TITLE_SUBPICTURE_ATTR)
    title_subpicture = parse_subpicture_table(r, SUBPICTURE_STREAM_SLOTS)

    # ── VTS_PGCI ──
    pgci = parse_pgci(r, pointers.vts_pgci * DVD_BLOCK_LEN)

    vts = VtsDescriptor(
        title_set=title_set,
        identifier=identifier,
        last_sector_vts=r.u32_at(_LAST_SECTOR_VTS),
        last_sector_ifo=r.u32_at(_LAST_SECTOR_IFO),
        version=parse_version(r.u8_at(_VERSION)),
        category=r.u32_at(_CATEGORY),
        vtsi_mat_end=r.u32_at(_VTSI_MAT_END),
        menu_vob_sector=r.u32_at(_MENU_VOB_SECTOR),
        title_vob_sector=r.u32_at(_TITLE_VOB_SECTOR),
        pointers=pointers,
        menu_video=menu_video,
        menu_audio_count=r.u16_at(_MENU_AUDIO_COUNT),
        menu_audio=menu_audio,
        menu_subpicture_count=r.u16_at(_MENU_SUBPICTURE_COUNT),
        menu_subpicture=menu_subpicture,
        title_video=title_video,
        title_audio_count=r.u16_at(_TITLE_AUDIO_COUNT),
        title_audio=title_audio,
        title_subpicture_count=r.u16_at(_TITLE_SUBPICTURE_COUNT),
        title_subpicture=title_subpicture,
        pgci=pgci,
    )
    log.debug(
        "VTS %02d: %d program chain(s), %d audio, %d subpicture stream(s)",
        title_set,
        vts.pgci.count,
        vts.title_audio_count,
        vts.title_subpicture_count,
    )
    return vts
