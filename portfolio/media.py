# portfolio/media.py
"""
Media reference resolution.

A project's ``image_url`` holds whatever the admin pasted or uploaded: a
YouTube/Vimeo link, a direct video file, or (by default) an image. Both the
public page and the dashboard classify it here and never re-implement the
patterns themselves.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

YOUTUBE_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)", re.I)
VIMEO_RE = re.compile(r"vimeo\.com/", re.I)
VIMEO_ID_RE = re.compile(r"vimeo\.com/(\d+)", re.I)
VIDEO_FILE_RE = re.compile(r"\.(?:mp4|webm|ogg)(?:\?.*)?$", re.I)

YOUTUBE_EMBED = "https://www.youtube.com/embed/{}"
VIMEO_EMBED = "https://player.vimeo.com/video/{}"


class MediaKind(str, enum.Enum):
    NONE = "none"
    YOUTUBE = "youtube"
    VIMEO = "vimeo"
    VIDEO_FILE = "video"
    IMAGE = "image"


@dataclass(frozen=True)
class MediaReference:
    kind: MediaKind
    url: str = ""

    def __bool__(self):
        return self.kind is not MediaKind.NONE

    @property
    def is_hosted_video(self) -> bool:
        return self.kind in (MediaKind.YOUTUBE, MediaKind.VIMEO)

    @property
    def embed(self) -> str:
        return embed_url(self)


NO_MEDIA = MediaReference(MediaKind.NONE)


def classify(raw: str | None) -> MediaReference:
    """Check order is YouTube -> Vimeo -> video file -> image."""
    url = (raw or "").strip()
    if not url:
        return NO_MEDIA
    if YOUTUBE_RE.search(url):
        return MediaReference(MediaKind.YOUTUBE, url)
    if VIMEO_RE.search(url):
        return MediaReference(MediaKind.VIMEO, url)
    if VIDEO_FILE_RE.search(url):
        return MediaReference(MediaKind.VIDEO_FILE, url)
    # no URL validation: a broken image simply fails to load
    return MediaReference(MediaKind.IMAGE, url)


def _youtube_id(url: str) -> str | None:
    candidate = url if "://" in url else f"https://{url}"
    try:
        parts = urlsplit(candidate)
        host = parts.hostname or ""
    except ValueError:
        return None
    if "youtu.be" in host:
        return parts.path.replace("/", "", 1) or None
    # case-blind, like classify()
    ids = next((v for k, v in parse_qs(parts.query).items() if k.lower() == "v"), None)
    return ids[0] if ids and ids[0] else None


def embed_url(ref: MediaReference) -> str:
    """
    Player URL for hosted videos, the stored URL for everything else.
    Hosted links we cannot take apart come back unchanged.
    """
    if ref.kind is MediaKind.NONE:
        raise ValueError("no media reference to embed")
    if ref.kind is MediaKind.YOUTUBE:
        video_id = _youtube_id(ref.url)
        return YOUTUBE_EMBED.format(video_id) if video_id else ref.url
    if ref.kind is MediaKind.VIMEO:
        m = VIMEO_ID_RE.search(ref.url)
        return VIMEO_EMBED.format(m.group(1)) if m else ref.url
    return ref.url
