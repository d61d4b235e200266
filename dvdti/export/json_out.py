"""JSON export for disc catalogs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from dvdti.ifo.attributes import VideoAttributes
from dvdti.ifo.pgc import PlaybackTime
from dvdti.model import AudioTrack, DiscCatalog, SubtitleTrack, Title


def _runtime_to_dict(time: PlaybackTime) -> dict:
    return {
        "hours": time.hours,
        "minutes": time.minutes,
        "seconds": time.seconds,
        "frames": time.frames,
        "frame_rate": time.frame_rate,
        "total_seconds": time.total_seconds,
        "text": str(time),
    }


def _video_to_dict(video: VideoAttributes) -> dict:
    resolution = video.resolution
    return {
        "coding": video.coding.value,
        "standard": video.standard.value,
        "aspect_ratio": video.aspect_ratio.value,
        "auto_pan_scan_allowed": video.auto_pan_scan_allowed,
        "auto_letterbox_allowed": video.auto_letterbox_allowed,
        "closed_captions": video.use_closed_captions,
        "resolution": list(resolution) if resolution is not None else None,
        "letterboxed": video.letterboxed,
        "pal_source": video.pal_source.value,
    }


def _audio_to_dict(track: AudioTrack) -> dict:
    return {
        "id": track.id,
        "stream": track.stream,
        "coding": track.coding.value,
        "multichannel_extension": track.multichannel_extension,
        "language_type": track.language_type.value,
        "language_code": track.language_code,
        "language": track.language,
        "channels": track.channels,
        "channel_layout": track.channel_layout,
        "application_mode": track.application_mode.value,
        "quantization": track.quantization.value,
        "sample_rate": track.sample_rate,
        "code_extension": track.code_extension.value,
        "dolby_surround": track.dolby_surround,
    }


def _subtitle_to_dict(track: SubtitleTrack) -> dict:
    return {
        "id": track.id,
        "language": track.language,
        "language_code": track.language_code,
        "description": track.description,
        "stream_number": track.stream_number,
        "variant": track.variant,
        "coding": track.coding.value,
        "code_extension": track.code_extension.value,
    }


def _title_to_dict(title: Title) -> dict:
    return {
        "id": title.id,
        "number": title.number,
        "vts_number": title.vts_number,
        "vts_title_number": title.vts_title_number,
        "chapter_count": title.chapter_count,
        "angle_count": title.angle_count,
        "runtime": _runtime_to_dict(title.runtime),
        "video": _video_to_dict(title.video),
        "audio_tracks": [_audio_to_dict(a) for a in title.audio_tracks],
        "subtitle_tracks": [_subtitle_to_dict(s) for s in title.subtitle_tracks],
    }


def catalog_to_dict(catalog: DiscCatalog) -> dict:
    """Convert a DiscCatalog to a JSON-serializable dict."""
    disc = catalog.disc
    return {
        "schema_version": "dvdti.disc.v1",
        "disc": {
            "path": catalog.path,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "provider_id": disc.provider_id,
            "version": disc.version,
            "title_set_count": disc.title_set_count,
            "volume_count": disc.volume_count,
            "volume_number": disc.volume_number,
            "side_id": disc.side_id,
        },
        "titles": [_title_to_dict(t) for t in catalog.titles],
    }


def export_json(catalog: DiscCatalog, path: str | Path | None = None, pretty: bool = True) -> str:
    """Export a catalog to JSON. If path given, write to file. Always returns JSON string."""
    data = catalog_to_dict(catalog)
    indent = 2 if pretty else None
    text = json.dumps(data, indent=indent, default=str)
    if path is not None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return text
