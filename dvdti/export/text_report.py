"""Plain text report for terminal display."""

from __future__ import annotations

from dvdti.ifo.pgc import PlaybackTime
from dvdti.model import DiscCatalog, Title


def format_runtime(time: PlaybackTime) -> str:
    """Format a playback time as HH:MM:SS, or MM:SS when under an hour."""
    if time.hours > 0:
        return f"{time.hours:02d}:{time.minutes:02d}:{time.seconds:02d}"
    return f"{time.minutes:02d}:{time.seconds:02d}"


def _video_profile(title: Title) -> str:
    video = title.video
    parts = [video.coding.value, video.standard.value, video.aspect_ratio.value]
    if video.resolution is not None:
        width, height = video.resolution
        parts.append(f"{width}x{height}")
    if video.letterboxed:
        parts.append("letterboxed")
    if video.use_closed_captions:
        parts.append("CC")
    return ", ".join(parts)


def title_detail(title: Title) -> list[str]:
    """Return the report lines for one title."""
    lines = [f"Title # {title.number}"]
    lines.append(f"  VTS:      {title.vts_number:02d} (title {title.vts_title_number} in set)")
    lines.append(f"  Runtime:  {format_runtime(title.runtime)}")
    lines.append(f"  Chapters: {title.chapter_count}")
    lines.append(f"  Angles:   {title.angle_count}")
    lines.append(f"  Video:    {_video_profile(title)}")
    for track in title.audio_tracks:
        s = f"\tAudio track # {track.id + 1}:  {track.language}"
        s += f" ({track.coding.value})"
        s += f" ({track.channel_layout})"
        if track.dolby_surround:
            s += " (Dolby Surround)"
        lines.append(s)
    for sub in title.subtitle_tracks:
        lines.append(f"\tSubtitle track [{sub.id}],  {sub.description}")
    return lines


def text_report(catalog: DiscCatalog) -> str:
    """Generate a plain text summary report."""
    lines: list[str] = []
    disc = catalog.disc

    lines.append("=" * 60)
    lines.append("Disc Summary")
    lines.append("=" * 60)
    lines.append(f"  Path:       {catalog.path}")
    lines.append(f"  Provider:   {disc.provider_id or '-'}")
    lines.append(f"  Version:    {disc.version}")
    lines.append(f"  Volume:     {disc.volume_number}/{disc.volume_count} (side {disc.side_id})")
    lines.append(f"  Title sets: {disc.title_set_count}")
    lines.append(f"  Titles:     {len(catalog.titles)}")
    lines.append("")

    lines.append("-" * 60)
    lines.append("Titles")
    lines.append("-" * 60)
    lines.append(f"  {'#':>3} {'VTS':>4} {'Runtime':>10} {'Ch':>4} {'Audio':>6} {'Subs':>5}")
    lines.append(f"  {'-':>3} {'---':>4} {'-------':>10} {'--':>4} {'-----':>6} {'----':>5}")
    for t in catalog.titles:
        lines.append(
            f"  {t.number:>3} {t.vts_number:>4} {format_runtime(t.runtime):>10}"
            f" {t.chapter_count:>4} {len(t.audio_tracks):>6} {len(t.subtitle_tracks):>5}"
        )
    lines.append("")

    for t in catalog.titles:
        lines.append("-" * 60)
        lines.extend(title_detail(t))
        lines.append("")

    return "\n".join(lines)
