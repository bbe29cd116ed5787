"""
Helpers for presenting video timestamps and building YouTube links.
"""

import math
from typing import Optional, Union
from urllib.parse import parse_qs, urlencode, urlparse

WATCH_URL = "https://www.youtube.com/watch"


def format_timestamp(seconds: Union[int, float]) -> str:
    """Format seconds as zero-padded MM:SS. Minutes are not wrapped into hours."""
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"


def watch_url(video_id: str, timestamp: Optional[Union[int, float]] = None) -> str:
    params = {"v": video_id}
    if timestamp is not None:
        params["t"] = math.floor(timestamp)
    return f"{WATCH_URL}?{urlencode(params)}"


def extract_video_id(url: str) -> Optional[str]:
    """Return the ``v`` query parameter of a watch URL, if any."""
    values = parse_qs(urlparse(url).query).get("v")
    if not values or not values[0]:
        return None
    return values[0]
