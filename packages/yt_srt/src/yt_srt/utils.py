"""yt_srt.utils

Small pure helpers (no Playwright or network dependencies) so they are easy
to unit-test and reuse.
"""
from __future__ import annotations

import re
import unicodedata
from typing import Dict

from .errors import InvalidURL

__all__ = [
    "video_id",
    "watch_url",
    "safe_key",
    "sec_ch_headers",
]

# works inside Markdown links too: "[talk](https://youtu.be/<id>)"
_VID_RE = re.compile(r"(?:youtu\.be/|[?&]v=|/shorts/|/embed/)([A-Za-z0-9_-]{11})")
_BARE_ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")


def video_id(url: str) -> str:
    """Return the 11-char video id of *url* (or of a bare id)."""
    text = url.strip()
    if (m := _VID_RE.search(text)):
        return m.group(1)
    if _BARE_ID_RE.fullmatch(text):
        return text
    raise InvalidURL(f"{text!r} doesn't look like a YouTube video")


def watch_url(vid: str) -> str:
    return f"https://www.youtube.com/watch?v={vid}"


def safe_key(text: str) -> str:
    """Return an ASCII key safe for file names and store ids."""
    ascii_txt = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode()
    ascii_txt = re.sub(r"[^A-Za-z0-9_.-]+", "_", ascii_txt)
    ascii_txt = re.sub(r"_+", "_", ascii_txt)
    return ascii_txt.strip("._")[:255] or "_"


# ----------  Client-Hint headers ---------- #
# first match wins; order matters ("android" UAs also say "linux")
_PLATFORMS = (
    ("android", "Android"),
    ("iphone", "iOS"),
    ("ipad", "iOS"),
    ("win", "Windows"),
    ("macintosh", "macOS"),
    ("linux", "Linux"),
)
# (UA token, brand list template); Edge UAs also carry "chrome/"
_BRANDS = (
    ("edg/", '"Not_A Brand";v="8", "Chromium";v="{v}", "Microsoft Edge";v="{v}"'),
    ("chrome/", '"Not_A Brand";v="8", "Chromium";v="{v}", "Google Chrome";v="{v}"'),
    ("firefox/", '"Firefox";v="{v}"'),
)


def sec_ch_headers(user_agent: str) -> Dict[str, str]:
    """Return the ``Sec-CH-UA*`` headers a browser with *user_agent* sends."""
    ua = user_agent.lower()
    platform = next((name for token, name in _PLATFORMS if token in ua), "Unknown")
    mobile = platform in ("Android", "iOS") or "mobi" in ua

    brands = '"Not_A Brand";v="99"'
    for token, template in _BRANDS:
        m = re.search(re.escape(token) + r"(\d+)", ua)
        if m:
            brands = template.format(v=m.group(1))
            break

    return {
        "Sec-CH-UA": brands,
        "Sec-CH-UA-Mobile": "?1" if mobile else "?0",
        "Sec-CH-UA-Platform": f'"{platform}"',
    }
