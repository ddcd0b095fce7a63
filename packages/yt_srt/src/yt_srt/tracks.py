"""yt_srt.tracks – discover and select caption tracks.

The watch page embeds ``ytInitialPlayerResponse`` in an inline script; the
caption track list lives under
``captions.playerCaptionsTracklistRenderer.captionTracks``.  Rather than
evaluating the whole blob we locate the ``"captionTracks":`` key and decode
just the JSON array that follows it.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from .constants import (
    ASR_KIND,
    CAPTION_TRACKS_KEY,
    JSON3_FORMAT_PARAM,
    PLAYER_RESPONSE_PREFIX,
)
from .converter import SubtitleKind
from .errors import NoCaptionsFound

__all__ = [
    "CaptionTrack",
    "PLAYER_SCRIPT_JS",
    "extract_caption_tracks",
    "find_player_script",
    "select_tracks",
]

# Runs inside the page; returns the player-response script text or null.
PLAYER_SCRIPT_JS = f"""() => {{
    let target = null;
    document.querySelectorAll('script').forEach(s => {{
        const html = s.innerHTML;
        if (html.startsWith('{PLAYER_RESPONSE_PREFIX}')) {{
            target = html;
        }}
    }});
    return target;
}}"""

_TRACKS_RE = re.compile(r'"%s"\s*:\s*(?=\[)' % CAPTION_TRACKS_KEY)
_DECODER = json.JSONDecoder()


@dataclass(frozen=True)
class CaptionTrack:
    language_code: str
    base_url: str
    is_generated: bool

    @property
    def kind(self) -> SubtitleKind:
        return SubtitleKind.AUTO_GENERATED if self.is_generated else SubtitleKind.USER_GENERATED

    @property
    def json_url(self) -> str:
        return f"{self.base_url}{JSON3_FORMAT_PARAM}"


def find_player_script(html: str) -> Optional[str]:
    """Return the inline ``ytInitialPlayerResponse`` script from static *html*."""
    soup = BeautifulSoup(html, "lxml")
    target = None
    for script in soup.find_all("script"):
        text = script.string or ""
        if text.startswith(PLAYER_RESPONSE_PREFIX):
            target = text
    return target


def extract_caption_tracks(script_text: Optional[str]) -> list[CaptionTrack]:
    """Parse the ``captionTracks`` array embedded in *script_text*.

    Raises :class:`NoCaptionsFound` when the key is missing or the fragment
    is not valid JSON.  Entries without ``languageCode``/``baseUrl`` are
    ignored.
    """
    if not script_text:
        raise NoCaptionsFound("player response script not found")
    m = _TRACKS_RE.search(script_text)
    if m is None:
        raise NoCaptionsFound(f"no {CAPTION_TRACKS_KEY!r} in player response")
    try:
        raw, _ = _DECODER.raw_decode(script_text, m.end())
    except json.JSONDecodeError as exc:
        raise NoCaptionsFound(f"unparsable {CAPTION_TRACKS_KEY!r}: {exc}") from exc

    tracks = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        lang, url = entry.get("languageCode"), entry.get("baseUrl")
        if not lang or not url:
            continue
        tracks.append(CaptionTrack(lang, url, entry.get("kind") == ASR_KIND))
    return tracks


def select_tracks(
    tracks: Iterable[CaptionTrack],
    language: Optional[str] = None,
    prefer_auto_generated: bool = False,
) -> list[CaptionTrack]:
    """Pick the tracks to download.

    No *language* → every track.  Otherwise only tracks in *language* whose
    generated flag equals *prefer_auto_generated*; an empty selection is
    returned as-is, the other kind is never substituted.
    """
    if not language:
        return list(tracks)
    return [
        t for t in tracks
        if t.language_code == language and t.is_generated == prefer_auto_generated
    ]
