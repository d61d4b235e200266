"""Decoders for the packed video, audio and subpicture attribute records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dvdti.ifo.reader import BinaryReader, trim_field

# ---------------------------------------------------------------------------
# Bit layouts (http://dvd.sourceforge.net/dvdinfo/ifo.html)
#
# Video (2 bytes)
#   byte 0:  [coding(2)][standard(2)][aspect(2)][no_pan_scan(1)][no_letterbox(1)]
#   byte 1:  [cc_field1(1)][cc_field2(1)][resolution(3)][letterboxed(1)][rsv(1)][film(1)]
#
# Audio (8 bytes)
#   byte 0:  [coding(3)][multichannel_ext(1)][lang_type(2)][app_mode(2)]
#   byte 1:  [quantization(2)][sample_rate(2)][rsv(1)][channels-1(3)]
#   bytes 2-3: language code, byte 4: reserved, byte 5: code extension
#   byte 6: reserved, byte 7: application info
#
# Subpicture (6 bytes)
#   byte 0:  [coding(3)][rsv(3)][lang_type(2)]
#   byte 1: reserved, bytes 2-3: language code
#   byte 4: language code extension, byte 5: presentation extension
# ---------------------------------------------------------------------------

VIDEO_ATTR_SIZE = 2
AUDIO_ATTR_SIZE = 8
SUBPICTURE_ATTR_SIZE = 6


class VideoCoding(str, Enum):
    MPEG1 = "MPEG-1"
    MPEG2 = "MPEG-2"


class VideoStandard(str, Enum):
    NTSC = "NTSC"
    PAL = "PAL"
    UNKNOWN = "Unknown"


class AspectRatio(str, Enum):
    FOUR_THREE = "4:3"
    SIXTEEN_NINE = "16:9"
    UNSPECIFIED = "Unspecified"


class PalSource(str, Enum):
    NOT_PAL = "Not PAL"
    CAMERA = "Camera"
    FILM = "Film"


class AudioCoding(str, Enum):
    AC3 = "AC-3"
    MPEG1 = "MPEG-1"
    MPEG2_EXTENDED = "MPEG-2 Extended"
    LPCM = "LPCM"
    DTS = "DTS"
    UNKNOWN = "Unknown"


class LanguageType(str, Enum):
    UNSPECIFIED = "Unspecified"
    USE_LANGUAGE_CODE = "Language code"


class ApplicationMode(str, Enum):
    UNSPECIFIED = "Unspecified"
    KARAOKE = "Karaoke"
    SURROUND = "Surround"


class Quantization(str, Enum):
    UNKNOWN = "Unknown"
    NO_DRC = "No DRC"
    DRC = "DRC"
    BITS_16 = "16 bit"
    BITS_20 = "20 bit"
    BITS_24 = "24 bit"


class AudioCodeExtension(str, Enum):
    UNSPECIFIED = "Unspecified"
    NORMAL = "Normal"
    VISUALLY_IMPAIRED = "Visually impaired"
    DIRECTORS_COMMENTS = "Director's comments"
    ALTERNATE_DIRECTORS_COMMENTS = "Alternate director's comments"


class SubpictureCoding(str, Enum):
    NONE = "None"
    TWO_BIT_RLE = "2-bit RLE"


class SubpictureExtension(str, Enum):
    NOT_SPECIFIED = "Not specified"
    NORMAL = "Normal"
    LARGE = "Large"
    CHILDREN = "Children"
    CLOSED_CAPTIONS = "Closed captions"
    LARGE_CLOSED_CAPTIONS = "Large closed captions"
    CHILDRENS_CLOSED_CAPTIONS = "Children's closed captions"
    FORCED = "Forced"
    DIRECTORS_COMMENTARY = "Director's commentary"
    LARGE_DIRECTORS_COMMENTARY = "Large director's commentary"
    DIRECTORS_COMMENTARY_FOR_CHILDREN = "Director's commentary for children"


# ── code tables ──────────────────────────────────────────────────────

_ASPECT: dict[int, AspectRatio] = {
    0: AspectRatio.FOUR_THREE,
    3: AspectRatio.SIXTEEN_NINE,
}

_RESOLUTION_NTSC: dict[int, tuple[int, int]] = {
    0: (720, 480),
    1: (704, 480),
    2: (352, 480),
    3: (352, 240),
}

_RESOLUTION_PAL: dict[int, tuple[int, int]] = {
    0: (720, 576),
    1: (704, 576),
    2: (352, 576),
    3: (352, 288),
}

_AUDIO_CODING: dict[int, AudioCoding] = {
    0: AudioCoding.AC3,
    2: AudioCoding.MPEG1,
    3: AudioCoding.MPEG2_EXTENDED,
    4: AudioCoding.LPCM,
    6: AudioCoding.DTS,
}

_APPLICATION_MODE: dict[int, ApplicationMode] = {
    1: ApplicationMode.KARAOKE,
    2: ApplicationMode.SURROUND,
}

_LPCM_QUANTIZATION: dict[int, Quantization] = {
    0: Quantization.BITS_16,
    1: Quantization.BITS_20,
    2: Quantization.BITS_24,
}

_MPEG_QUANTIZATION: dict[int, Quantization] = {
    0: Quantization.NO_DRC,
    1: Quantization.DRC,
}

_SAMPLE_RATE: dict[int, int] = {
    0: 48_000,
    1: 96_000,
}

_CHANNEL_LAYOUT: dict[int, str] = {
    1: "1.0",
    2: "2.0",
    6: "5.1",
    8: "7.1",
}

_AUDIO_CODE_EXTENSION: dict[int, AudioCodeExtension] = {
    1: AudioCodeExtension.NORMAL,
    2: AudioCodeExtension.VISUALLY_IMPAIRED,
    3: AudioCodeExtension.DIRECTORS_COMMENTS,
    4: AudioCodeExtension.ALTERNATE_DIRECTORS_COMMENTS,
}

_SUBPICTURE_EXTENSION: dict[int, SubpictureExtension] = {
    1: SubpictureExtension.NORMAL,
    2: SubpictureExtension.LARGE,
    3: SubpictureExtension.CHILDREN,
    5: SubpictureExtension.CLOSED_CAPTIONS,
    6: SubpictureExtension.LARGE_CLOSED_CAPTIONS,
    7: SubpictureExtension.CHILDRENS_CLOSED_CAPTIONS,
    9: SubpictureExtension.FORCED,
    13: SubpictureExtension.DIRECTORS_COMMENTARY,
    14: SubpictureExtension.LARGE_DIRECTORS_COMMENTARY,
    15: SubpictureExtension.DIRECTORS_COMMENTARY_FOR_CHILDREN,
}


def channel_layout(channels: int) -> str:
    """Return the conventional layout label for a channel count."""
    return _CHANNEL_LAYOUT.get(channels, f"{channels}ch")


# ── records ──────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class VideoAttributes:
    coding: VideoCoding
    standard: VideoStandard
    aspect_ratio: AspectRatio
    auto_pan_scan_allowed: bool
    auto_letterbox_allowed: bool
    cc_field1: bool
    cc_field2: bool
    resolution_code: int
    letterboxed: bool
    pal_source: PalSource

    @property
    def use_closed_captions(self) -> bool:
        """True when either line-21 closed-caption field is present."""
        return self.cc_field1 or self.cc_field2

    @property
    def resolution(self) -> tuple[int, int] | None:
        """Picture size as *(width, height)*, or ``None`` if the code is undefined."""
        table = _RESOLUTION_PAL if self.standard is VideoStandard.PAL else _RESOLUTION_NTSC
        return table.get(self.resolution_code)


@dataclass(frozen=True, slots=True)
class AudioAttributes:
    coding: AudioCoding
    multichannel_extension: bool
    language_type: LanguageType
    application_mode: ApplicationMode
    quantization: Quantization
    sample_rate: int  # Hz, 0 when the code is undefined
    channels: int
    language_code: str
    code_extension: AudioCodeExtension
    application_info: int
    dolby_surround: bool

    @property
    def channel_layout(self) -> str:
        return channel_layout(self.channels)


@dataclass(frozen=True, slots=True)
class SubpictureAttributes:
    coding: SubpictureCoding
    language_type: LanguageType
    language_code: str
    language_extension: int
    code_extension: SubpictureExtension


# ── decoders ─────────────────────────────────────────────────────────


def parse_video_attributes(r: BinaryReader) -> VideoAttributes:
    """Decode a 2-byte video attribute record at the cursor."""
    b0 = r.u8()
    b1 = r.u8()

    standard_bits = (b0 >> 4) & 0x03
    if standard_bits == 0:
        standard = VideoStandard.NTSC
    elif standard_bits == 1:
        standard = VideoStandard.PAL
    else:
        standard = VideoStandard.UNKNOWN

    if standard is VideoStandard.PAL:
        pal_source = PalSource.FILM if b1 & 0x01 else PalSource.CAMERA
    else:
        pal_source = PalSource.NOT_PAL

    return VideoAttributes(
        coding=VideoCoding.MPEG1 if (b0 >> 6) == 0 else VideoCoding.MPEG2,
        standard=standard,
        aspect_ratio=_ASPECT.get((b0 >> 2) & 0x03, AspectRatio.UNSPECIFIED),
        # Both permissions are stored as "prohibited" bits.
        auto_pan_scan_allowed=not (b0 & 0x02),
        auto_letterbox_allowed=not (b0 & 0x01),
        cc_field1=bool(b1 & 0x80),
        cc_field2=bool(b1 & 0x40),
        resolution_code=(b1 >> 3) & 0x07,
        letterboxed=bool(b1 & 0x04),
        pal_source=pal_source,
    )


def _audio_quantization(coding: AudioCoding, bits: int) -> Quantization:
    if coding in (AudioCoding.MPEG1, AudioCoding.MPEG2_EXTENDED):
        return _MPEG_QUANTIZATION.get(bits, Quantization.UNKNOWN)
    if coding is AudioCoding.LPCM:
        return _LPCM_QUANTIZATION.get(bits, Quantization.UNKNOWN)
    return Quantization.UNKNOWN


def parse_audio_attributes(r: BinaryReader) -> AudioAttributes:
    """Decode an 8-byte audio attribute record at the cursor."""
    r.require(AUDIO_ATTR_SIZE)
    b0 = r.u8()
    b1 = r.u8()
    language_code = trim_field(r.read_string(2))
    r.skip(1)  # reserved
    code_extension = r.u8()
    r.skip(1)  # reserved
    application_info = r.u8()

    coding = _AUDIO_CODING.get(b0 >> 5, AudioCoding.UNKNOWN)
    application_mode = _APPLICATION_MODE.get(b0 & 0x03, ApplicationMode.UNSPECIFIED)

    return AudioAttributes(
        coding=coding,
        multichannel_extension=bool(b0 & 0x10),
        language_type=(
            LanguageType.UNSPECIFIED if ((b0 >> 2) & 0x03) == 0 else LanguageType.USE_LANGUAGE_CODE
        ),
        application_mode=application_mode,
        quantization=_audio_quantization(coding, b1 >> 6),
        sample_rate=_SAMPLE_RATE.get((b1 >> 4) & 0x03, 0),
        channels=(b1 & 0x07) + 1,
        language_code=language_code,
        code_extension=_AUDIO_CODE_EXTENSION.get(code_extension, AudioCodeExtension.UNSPECIFIED),
        application_info=application_info,
        dolby_surround=application_mode is ApplicationMode.SURROUND and bool(application_info & 0x08),
    )


def parse_subpicture_attributes(r: BinaryReader) -> SubpictureAttributes:
    """Decode a 6-byte subpicture attribute record at the cursor."""
    r.require(SUBPICTURE_ATTR_SIZE)
    b0 = r.u8()
    r.skip(1)  # reserved
    language_code = trim_field(r.read_string(2))
    language_extension = r.u8()
    code_extension = r.u8()

    return SubpictureAttributes(
        coding=SubpictureCoding.TWO_BIT_RLE if (b0 >> 5) == 0 else SubpictureCoding.NONE,
        language_type=(
            LanguageType.UNSPECIFIED if (b0 & 0x03) == 0 else LanguageType.USE_LANGUAGE_CODE
        ),
        language_code=language_code,
        language_extension=language_extension,
        code_extension=_SUBPICTURE_EXTENSION.get(code_extension, SubpictureExtension.NOT_SPECIFIED),
    )


def parse_audio_table(r: BinaryReader, count: int) -> tuple[AudioAttributes, ...]:
    """Decode *count* consecutive audio attribute records."""
    return tuple(parse_audio_attributes(r) for _ in range(count))


def parse_subpicture_table(r: BinaryReader, count: int) -> tuple[SubpictureAttributes, ...]:
    """Decode *count* consecutive subpicture attribute records."""
    return tuple(parse_subpicture_attributes(r) for _ in range(count))
