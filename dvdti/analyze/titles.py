"""Resolve TT_SRPT entries into titles with playable audio and subtitle tracks."""

from __future__ import annotations

import logging

from dvdti.analyze.languages import UNKNOWN_LANGUAGE, LanguageTable
from dvdti.ifo.attributes import AspectRatio, LanguageType, SubpictureAttributes
from dvdti.ifo.disc import Disc
from dvdti.ifo.errors import UnsupportedStructureError
from dvdti.ifo.pgc import ProgramChain, TitleSearchEntry
from dvdti.ifo.vts import VtsDescriptor
from dvdti.model import CC_STREAM_NUMBER, AudioTrack, SubtitleTrack, Title

log = logging.getLogger(__name__)

VARIANT_WIDE = "Wide"
VARIANT_LETTERBOX = "Letterbox"
VARIANT_PAN_SCAN = "Pan & Scan"
VARIANT_4X3 = "4x3"
VARIANT_CC = "CC608"


def _language(languages: LanguageTable, language_type: LanguageType, code: str) -> str:
    if language_type is LanguageType.UNSPECIFIED:
        return UNKNOWN_LANGUAGE
    if code and code not in languages:
        log.debug("Language code %r not in table", code)
    return languages.lookup(code)


def _lookup_pgc(vts: VtsDescriptor, entry: TitleSearchEntry) -> ProgramChain:
    pgc = vts.pgci.find_title(entry.vts_title_number)
    if pgc is None:
        raise UnsupportedStructureError(
            f"VTS {entry.vts_number:02d} has no program chain for title "
            f"{entry.vts_title_number} ({vts.pgci.count} PGC(s))"
        )
    return pgc


def _audio_tracks(
    vts: VtsDescriptor, pgc: ProgramChain, languages: LanguageTable
) -> list[AudioTrack]:
    tracks: list[AudioTrack] = []
    used: set[int] = set()
    for slot, ctl in enumerate(pgc.audio_controls):
        if not ctl.available:
            continue
        if ctl.stream in used:
            log.debug("Dropping audio slot %d: logical stream %d already used", slot, ctl.stream)
            continue
        used.add(ctl.stream)
        attrs = vts.title_audio[ctl.stream]
        tracks.append(
            AudioTrack(
                id=slot,
                stream=ctl.stream,
                coding=attrs.coding,
                multichannel_extension=attrs.multichannel_extension,
                language_type=attrs.language_type,
                language_code=attrs.language_code,
                language=_language(languages, attrs.language_type, attrs.language_code),
                channels=attrs.channels,
                channel_layout=attrs.channel_layout,
                application_mode=attrs.application_mode,
                quantization=attrs.quantization,
                sample_rate=attrs.sample_rate,
                code_extension=attrs.code_extension,
                dolby_surround=attrs.dolby_surround,
            )
        )
    return tracks


class _SubtitleCollector:
    """Collects subtitle variants, keeping the first one per stream number.

    Display ids come from a per-title counter. Widescreen variants reserve
    their id before the stream check, so a dropped variant leaves a gap;
    4:3 and closed-caption tracks take an id only when kept.
    """

    def __init__(self) -> None:
        self.tracks: list[SubtitleTrack] = []
        self._streams: set[int] = set()
        self._last_id = 0

    def reserve_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def add(
        self,
        stream_number: int,
        variant: str,
        language: str,
        attrs: SubpictureAttributes,
        track_id: int | None = None,
        description: str | None = None,
    ) -> None:
        if stream_number in self._streams:
            log.debug("Dropping %s subtitle: stream %d already used", variant, stream_number)
            return
        self._streams.add(stream_number)
        if track_id is None:
            track_id = self.reserve_id()
        if description is None:
            description = f"{track_id}: {language} ({variant}) [VOBSUB]"
        self.tracks.append(
            SubtitleTrack(
                id=track_id,
                language=language,
                language_code=attrs.language_code,
                description=description,
                stream_number=stream_number,
                variant=variant,
                coding=attrs.coding,
                code_extension=attrs.code_extension,
            )
        )


def _subtitle_tracks(
    vts: VtsDescriptor, pgc: ProgramChain, languages: LanguageTable
) -> list[SubtitleTrack]:
    video = vts.title_video
    collector = _SubtitleCollector()

    for slot, ctl in enumerate(pgc.subpicture_controls):
        if not ctl.available:
            continue
        attrs = vts.title_subpicture[slot]
        lang = _language(languages, attrs.language_type, attrs.language_code)

        if video.aspect_ratio is AspectRatio.SIXTEEN_NINE:
            variants = [(ctl.stream_wide, VARIANT_WIDE)]
            if video.auto_letterbox_allowed:
                variants.append((ctl.stream_letterbox, VARIANT_LETTERBOX))
            if video.auto_pan_scan_allowed:
                variants.append((ctl.stream_pan_scan, VARIANT_PAN_SCAN))
            for stream_number, variant in variants:
                collector.add(
                    stream_number, variant, lang, attrs, track_id=collector.reserve_id()
                )
        else:
            collector.add(ctl.stream_4x3, VARIANT_4X3, lang, attrs)

    # Line-21 captions carry no language of their own; use the first subpicture slot's.
    if video.use_closed_captions:
        attrs = vts.title_subpicture[0]
        lang = languages.lookup(attrs.language_code)
        track_id = collector.reserve_id()
        collector.add(
            CC_STREAM_NUMBER,
            VARIANT_CC,
            lang,
            attrs,
            track_id=track_id,
            description=f"{track_id}: {lang}, Closed Caption [CC608]",
        )

    return collector.tracks


def resolve_title(disc: Disc, index: int, languages: LanguageTable) -> Title:
    """Build the :class:`Title` for TT_SRPT entry *index* (0-based)."""
    entry = disc.vmg.title_search.entries[index]
    if not 1 <= entry.vts_number <= disc.vts_count:
        raise UnsupportedStructureError(
            f"Title {index + 1} references VTS {entry.vts_number}, "
            f"disc has {disc.vts_count} title set(s)"
        )
    vts = disc.vts[entry.vts_number - 1]
    pgc = _lookup_pgc(vts, entry)

    title = Title(
        id=index,
        vts_number=entry.vts_number,
        vts_title_number=entry.vts_title_number,
        chapter_count=entry.chapter_count,
        angle_count=entry.angle_count,
        runtime=pgc.playback_time,
        video=vts.title_video,
        audio_tracks=tuple(_audio_tracks(vts, pgc, languages)),
        subtitle_tracks=tuple(_subtitle_tracks(vts, pgc, languages)),
    )
    log.debug(
        "Title %d: VTS %02d/%d, %s, %d audio, %d subtitle track(s)",
        title.number,
        title.vts_number,
        title.vts_title_number,
        title.runtime,
        len(title.audio_tracks),
        len(title.subtitle_tracks),
    )
    return title
