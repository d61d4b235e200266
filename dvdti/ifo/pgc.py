"""Parsers for the IFO navigation tables: TT_SRPT, PGC and VTS_PGCI."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dvdti.ifo.reader import BinaryReader, bcd

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layouts
#
# TT_SRPT:   u16 count, u16 reserved, u32 end address, then count × 12 bytes
#            [type u8][angles u8][chapters u16][parental u16][vtsn u8][vts_ttn u8][sector u32]
#
# VTS_PGCI:  u16 count, u16 reserved, u32 end address, then count × 8 bytes
#            [entry(1)|title(7)][reserved u8][parental u16][pgc offset u32]
#
# PGC:       0x02 programs, 0x03 cells, 0x04..0x07 playback time (BCD),
#            0x0C 8 × 2-byte audio control, 0x1C 32 × 4-byte subpicture control
# ---------------------------------------------------------------------------

_TABLE_HEADER_SIZE = 8
_TT_SRPT_ENTRY_SIZE = 12
_PGCI_ENTRY_SIZE = 8

_AUDIO_CONTROL_OFFSET = 0x0C
_SUBPICTURE_CONTROL_OFFSET = 0x1C
AUDIO_CONTROL_COUNT = 8
SUBPICTURE_CONTROL_COUNT = 32
PGC_SIZE = _SUBPICTURE_CONTROL_OFFSET + SUBPICTURE_CONTROL_COUNT * 4

_FRAME_RATE: dict[int, int] = {
    1: 25,
    3: 30,
}


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PlaybackTime:
    hours: int
    minutes: int
    seconds: int
    frames: int
    frame_rate: int  # 25, 30 or 0 when unknown

    @property
    def total_seconds(self) -> int:
        return self.hours * 3600 + self.minutes * 60 + self.seconds

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}.{self.frames:02d}"


@dataclass(frozen=True, slots=True)
class AudioStreamControl:
    available: bool
    stream: int  # logical audio stream, 0-7


@dataclass(frozen=True, slots=True)
class SubpictureStreamControl:
    available: bool
    stream_4x3: int
    stream_wide: int
    stream_letterbox: int
    stream_pan_scan: int


@dataclass(frozen=True, slots=True)
class ProgramChain:
    program_count: int  # chapters
    cell_count: int
    playback_time: PlaybackTime
    audio_controls: tuple[AudioStreamControl, ...]
    subpicture_controls: tuple[SubpictureStreamControl, ...]


@dataclass(frozen=True, slots=True)
class TitleSearchEntry:
    """One row of TT_SRPT, mapping a disc title to its title set."""

    title_type: int
    angle_count: int
    chapter_count: int
    parental_mask: int
    vts_number: int  # 1-based VTS_nn_0.IFO number
    vts_title_number: int  # 1-based title inside that VTS
    start_sector: int


@dataclass(frozen=True, slots=True)
class TitleSearchTable:
    end_address: int
    entries: tuple[TitleSearchEntry, ...]

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class ProgramChainEntry:
    is_entry: bool
    title_number: int
    parental_mask: int
    pgc: ProgramChain


@dataclass(frozen=True, slots=True)
class ProgramChainIndex:
    end_address: int
    entries: tuple[ProgramChainEntry, ...]

    @property
    def count(self) -> int:
        return len(self.entries)

    def find_title(self, title_number: int) -> ProgramChain | None:
        """Return the entry PGC for a 1-based title number within the VTS.

        Falls back to the PGC at position ``title_number - 1`` when no entry
        is flagged for that title; ``None`` if neither exists.
        """
        for entry in self.entries:
            if entry.is_entry and entry.title_number == title_number:
                return entry.pgc
        if 1 <= title_number <= len(self.entries):
            return self.entries[title_number - 1].pgc
        return None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_playback_time(r: BinaryReader) -> PlaybackTime:
    hours = r.bcd()
    minutes = r.bcd()
    seconds = r.bcd()
    packed = r.u8()
    return PlaybackTime(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        frames=bcd(packed & 0x3F),
        frame_rate=_FRAME_RATE.get(packed >> 6, 0),
    )


def _parse_audio_control(r: BinaryReader) -> AudioStreamControl:
    b0 = r.u8()
    r.skip(1)  # reserved
    return AudioStreamControl(available=bool(b0 & 0x80), stream=b0 & 0x07)


def _parse_subpicture_control(r: BinaryReader) -> SubpictureStreamControl:
    b0, b1, b2, b3 = r.read_bytes(4)
    return SubpictureStreamControl(
        available=bool(b0 & 0x80),
        stream_4x3=b0 & 0x1F,
        stream_wide=b1 & 0x1F,
        stream_letterbox=b2 & 0x1F,
        stream_pan_scan=b3 & 0x1F,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_pgc(r: BinaryReader, offset: int = 0) -> ProgramChain:
    """Parse a program chain starting at *offset* within *r*."""
    r.require_at(offset, PGC_SIZE)
    r.seek(offset + 2)
    program_count = r.u8()
    cell_count = r.u8()
    playback_time = _parse_playback_time(r)

    r.seek(offset + _AUDIO_CONTROL_OFFSET)
    audio = tuple(_parse_audio_control(r) for _ in range(AUDIO_CONTROL_COUNT))

    r.seek(offset + _SUBPICTURE_CONTROL_OFFSET)
    subpictures = tuple(_parse_subpicture_control(r) for _ in range(SUBPICTURE_CONTROL_COUNT))

    return ProgramChain(
        program_count=program_count,
        cell_count=cell_count,
        playback_time=playback_time,
        audio_controls=audio,
        subpicture_controls=subpictures,
    )


def parse_tt_srpt(r: BinaryReader, offset: int) -> TitleSearchTable:
    """Parse the title search pointer table at *offset*."""
    count = r.u16_at(offset)
    end_address = r.u32_at(offset + 4)
    r.require_at(offset + _TABLE_HEADER_SIZE, count * _TT_SRPT_ENTRY_SIZE)

    r.seek(offset + _TABLE_HEADER_SIZE)
    entries: list[TitleSearchEntry] = []
    for _ in range(count):
        entries.append(
            TitleSearchEntry(
                title_type=r.u8(),
                angle_count=r.u8(),
                chapter_count=r.u16(),
                parental_mask=r.u16(),
                vts_number=r.u8(),
                vts_title_number=r.u8(),
                start_sector=r.u32(),
            )
        )
    log.debug("TT_SRPT: %d title(s)", count)
    return TitleSearchTable(end_address=end_address, entries=tuple(entries))


def parse_pgci(r: BinaryReader, offset: int) -> ProgramChainIndex:
    """Parse a VTS_PGCI table at *offset*, decoding every program chain."""
    count = r.u16_at(offset)
    end_address = r.u32_at(offset + 4)
    r.require_at(offset + _TABLE_HEADER_SIZE, count * _PGCI_ENTRY_SIZE)

    # PGC offsets are relative to the start of the table.
    table = r.slice_from(offset)
    entries: list[ProgramChainEntry] = []
    for i in range(count):
        table.seek(_TABLE_HEADER_SIZE + i * _PGCI_ENTRY_SIZE)
        category = table.u8()
        table.skip(1)  # reserved
        parental_mask = table.u16()
        pgc_offset = table.u32()
        entries.append(
            ProgramChainEntry(
                is_entry=bool(category & 0x80),
                title_number=category & 0x7F,
                parental_mask=parental_mask,
                pgc=parse_pgc(table, pgc_offset),
            )
        )
    log.debug("VTS_PGCI: %d program chain(s)", count)
    return ProgramChainIndex(end_address=end_address, entries=tuple(entries))
