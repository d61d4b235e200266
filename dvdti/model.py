from __future__ import annotations

from dataclasses import dataclass, field

from dvdti.ifo.attributes import (
    ApplicationMode,
    AudioCodeExtension,
    AudioCoding,
    LanguageType,
    Quantization,
    SubpictureCoding,
    SubpictureExtension,
    VideoAttributes,
)
from dvdti.ifo.pgc import PlaybackTime

CC_STREAM_NUMBER = -1


@dataclass(frozen=True, slots=True)
class AudioTrack:
    id: int  # audio control slot, 0-7
    stream: int  # logical stream index, 0-7
    coding: AudioCoding
    multichannel_extension: bool
    language_type: LanguageType
    language_code: str
    language: str
    channels: int
    channel_layout: str
    application_mode: ApplicationMode
    quantization: Quantization
    sample_rate: int
    code_extension: AudioCodeExtension
    dolby_surround: bool = False


@dataclass(frozen=True, slots=True)
class SubtitleTrack:
    id: int  # 1-based display id
    language: str
    language_code: str
    description: str
    stream_number: int  # -1 for closed captions
    variant: str  # Wide, Letterbox, Pan & Scan, 4x3, CC608
    coding: SubpictureCoding = SubpictureCoding.TWO_BIT_RLE
    code_extension: SubpictureExtension = SubpictureExtension.NOT_SPECIFIED

    @property
    def is_closed_caption(self) -> bool:
        return self.stream_number == CC_STREAM_NUMBER


@dataclass(frozen=True, slots=True)
class Title:
    id: int  # 0-based position in TT_SRPT
    vts_number: int  # 1-based
    vts_title_number: int  # 1-based within the VTS
    chapter_count: int
    angle_count: int
    runtime: PlaybackTime
    video: VideoAttributes
    audio_tracks: tuple[AudioTrack, ...] = ()
    subtitle_tracks: tuple[SubtitleTrack, ...] = ()

    @property
    def number(self) -> int:
        """1-based title number as shown by players."""
        return self.id + 1


@dataclass(frozen=True, slots=True)
class DiscSummary:
    provider_id: str
    title_set_count: int
    volume_count: int
    volume_number: int
    side_id: int
    version: str


@dataclass(frozen=True, slots=True)
class DiscCatalog:
    path: str
    disc: DiscSummary
    titles: tuple[Title, ...] = field(default_factory=tuple)

    @property
    def longest_title(self) -> Title | None:
        if not self.titles:
            return None
        return max(self.titles, key=lambda t: t.runtime.total_seconds)
