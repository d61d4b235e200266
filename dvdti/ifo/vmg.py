"""Parser for the DVD-Video video manager, VIDEO_TS.IFO."""

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
    parse_video_attributes,
)
from dvdti.ifo.errors import FormatError
from dvdti.ifo.pgc import TitleSearchTable, parse_tt_srpt
from dvdti.ifo.reader import DVD_BLOCK_LEN, BinaryReader, trim_field

log = logging.getLogger(__name__)

VMG_MAGIC = b"DVDVIDEO-VMG"

# ---------------------------------------------------------------------------
# VMGI_MAT byte offsets
# ---------------------------------------------------------------------------

_LAST_SECTOR_VMG = 0x0C
_LAST_SECTOR_IFO = 0x1C
_VERSION = 0x21
_CATEGORY = 0x22
_VOLUME_COUNT = 0x26
_VOLUME_NUMBER = 0x28
_SIDE_ID = 0x2A
_TITLE_SET_COUNT = 0x3E
_PROVIDER_ID = 0x40
_PROVIDER_ID_LEN = 32
_VMG_POS = 0x60
_VMGI_MAT_END = 0x80
_FP_PGC_START = 0x84
_MENU_VOB_SECTOR = 0xC0
_SECTOR_POINTERS = 0xC4  # TT_SRPT .. VMGM_VOBU_ADMAP, 7 × u32
_MENU_VIDEO_ATTR = 0x100
_MENU_AUDIO_COUNT = 0x102
_MENU_AUDIO_ATTR = 0x104
_MENU_SUBPICTURE_COUNT = 0x154
_MENU_SUBPICTURE_ATTR = 0x156


@dataclass(frozen=True, slots=True)
class VmgSectorPointers:
    """Start sectors of the VMG tables, relative to the IFO file."""

    tt_srpt: int
    vmgm_pgci_ut: int
    vmg_ptl_mait: int
    vmg_vts_atrt: int
    vmg_txtdt_mg: int
    vmgm_c_adt: int
    vmgm_vobu_admap: int


@dataclass(frozen=True, slots=True)
class VmgDescriptor:
    """Decoded contents of ``VIDEO_TS.IFO``."""

    identifier: str
    last_sector_vmg: int
    last_sector_ifo: int
    version: str
    category: int
    volume_count: int
    volume_number: int
    side_id: int
    number_of_title_sets: int
    provider_id: str
    vmg_pos: int
    vmgi_mat_end: int
    first_play_pgc_start: int
    menu_vob_sector: int
    pointers: VmgSectorPointers
    menu_video: VideoAttributes
    menu_audio_count: int
    menu_audio: tuple[AudioAttributes, ...]
    menu_subpicture_count: int
    menu_subpicture: SubpictureAttributes
    title_search: TitleSearchTable

    @property
    def number_of_titles(self) -> int:
        return self.title_search.count


# ---------------------------------------------------------------------------
# Helpers shared with the VTS parser
# ---------------------------------------------------------------------------


def check_magic(r: BinaryReader, magic: bytes, name: str) -> str:
    """Validate the 12-byte identifier at the start of an IFO file."""
    found = r.bytes_at(0, len(magic))
    if found != magic:
        raise FormatError(f"Not a {name} file (magic={found!r})")
    return found.decode("ascii")


def parse_version(byte: int) -> str:
    """Format the specification version byte as ``major.minor``."""
    return f"{byte >> 4}.{byte & 0x0F}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_vmg(source: Union[BinaryReader, str, Path]) -> VmgDescriptor:
    """Parse a ``VIDEO_TS.IFO`` file and return a :class:`VmgDescriptor`."""
    if isinstance(source, BinaryReader):
        return _parse_vmg_reader(source)
    path = Path(source)
    with BinaryReader(path) as r:
        return _parse_vmg_reader(r)


def _parse_vmg_reader(r: BinaryReader) -> VmgDescriptor:
    identifier = check_magic(r, VMG_MAGIC, "VIDEO_TS.IFO")

    r.seek(_SECTOR_POINTERS)
    pointers = VmgSectorPointers(
        tt_srpt=r.u32(),
        vmgm_pgci_ut=r.u32(),
        vmg_ptl_mait=r.u32(),
        vmg_vts_atrt=r.u32(),
        vmg_txtdt_mg=r.u32(),
        vmgm_c_adt=r.u32(),
        vmgm_vobu_admap=r.u32(),
    )

    # ── menu attributes ──
    r.seek(_MENU_VIDEO_ATTR)
    menu_video = parse_video_attributes(r)
    menu_audio_count = r.u16_at(_MENU_AUDIO_COUNT)
    r.seek(_MENU_AUDIO_ATTR)
    menu_audio = parse_audio_table(r, 8)
    menu_subpicture_count = r.u16_at(_MENU_SUBPICTURE_COUNT)
    r.seek(_MENU_SUBPICTURE_ATTR)
    menu_subpicture = parse_subpicture_attributes(r)

    # ── TT_SRPT ──
    title_search = parse_tt_srpt(r, pointers.tt_srpt * DVD_BLOCK_LEN)

    vmg = VmgDescriptor(
        identifier=identifier,
        last_sector_vmg=r.u32_at(_LAST_SECTOR_VMG),
        last_sector_ifo=r.u32_at(_LAST_SECTOR_IFO),
        version=parse_version(r.u8_at(_VERSION)),
        category=r.u32_at(_CATEGORY),
        volume_count=r.u16_at(_VOLUME_COUNT),
        volume_number=r.u16_at(_VOLUME_NUMBER),
        side_id=r.u8_at(_SIDE_ID),
        number_of_title_sets=r.u16_at(_TITLE_SET_COUNT),
        provider_id=trim_field(r.string_at(_PROVIDER_ID, _PROVIDER_ID_LEN)),
        vmg_pos=r.u64_at(_VMG_POS),
        vmgi_mat_end=r.u32_at(_VMGI_MAT_END),
        first_play_pgc_start=r.u32_at(_FP_PGC_START),
        menu_vob_sector=r.u32_at(_MENU_VOB_SECTOR),
        pointers=pointers,
        menu_video=menu_video,
        menu_audio_count=menu_audio_count,
        menu_audio=menu_audio,
        menu_subpicture_count=menu_subpicture_count,
        menu_subpicture=menu_subpicture,
        title_search=title_search,
    )
    log.debug(
        "VMG: %d title set(s), %d title(s), provider=%r",
        vmg.number_of_title_sets,
        vmg.number_of_titles,
        vmg.provider_id,
    )
    return vmg
