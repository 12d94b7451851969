"""Recognise YouTube demo links on repository homepages."""
from __future__ import annotations

import re
from typing import Optional

_VIDEO_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"^([a-zA-Z0-9_-]{11})$"),
]


def extract_youtube_video_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def is_youtube_url(url: Optional[str]) -> bool:
    # bare 11-character ids are not links
    return bool(url) and "youtu" in url and extract_youtube_video_id(url) is not None
