"""yt_srt.fetcher – select caption tracks and download them concurrently.

Each selected track is fetched and converted in its own task.  A failure in
one track is logged and only drops that track; the call returns once every
task has settled.
"""
from __future__ import annotations

import asyncio
import os
from typing import Any, Optional

import requests

from .constants import DEFAULT_HTTP_TIMEOUT, ENV_HTTP_TIMEOUT
from .converter import SrtConverter, SubtitleResult
from .errors import NoCaptionsFound, UnknownSubtitleKind
from .logger import log
from .session import build_session
from .tracks import (
    PLAYER_SCRIPT_JS,
    CaptionTrack,
    extract_caption_tracks,
    select_tracks,
)

__all__ = [
    "fetch_subtitles",
    "fetch_tracks",
    "fetch_track",
    "http_timeout",
]


def http_timeout() -> float:
    return float(os.getenv(ENV_HTTP_TIMEOUT, DEFAULT_HTTP_TIMEOUT))


async def fetch_track(
    track: CaptionTrack,
    session: requests.Session,
    results: list[SubtitleResult],
    *,
    source: str = "",
    timeout: float | None = None,
) -> None:
    """Download *track* as json3, convert it and append to *results*."""
    timeout = http_timeout() if timeout is None else timeout
    try:
        resp = await asyncio.to_thread(session.get, track.json_url, timeout=timeout)
        resp.raise_for_status()
        doc = resp.json()
    except (requests.exceptions.RequestException, ValueError) as exc:
        log.warning(
            "Unable to fetch subtitles for %s, language:%s\nReason:%s",
            source, track.language_code, exc,
        )
        return

    log.debug(
        "Subtitles for %s lang:%s, type:%s fetched, converting to SRT...",
        source, track.language_code, track.kind.value,
    )
    try:
        conv = SrtConverter(doc, track.language_code, track.kind)
        conv.convert()
    except UnknownSubtitleKind:
        raise
    except Exception as exc:  # noqa: BLE001 - malformed document, drop track
        log.warning(
            "Unable to convert subtitles for %s, language:%s\nReason:%s",
            source, track.language_code, exc,
        )
        return
    results.append(conv.to_result())


async def fetch_tracks(
    script_text: Optional[str],
    language: Optional[str] = None,
    prefer_auto_generated: bool = False,
    *,
    session: requests.Session | None = None,
    source: str = "",
    timeout: float | None = None,
) -> list[SubtitleResult]:
    """Select tracks from *script_text* and return their SRT conversions.

    Parameters
    ----------
    script_text
        Text containing the embedded ``"captionTracks": [...]`` fragment.
    language
        Language code to fetch.  Falsy → every available track.
    prefer_auto_generated
        With a *language*, fetch only the ASR track (``True``) or only the
        human-authored track (``False``).
    session
        ``requests``-compatible session; a fresh one is built when omitted.
    source
        Page URL, used in log lines only.

    Results come back in completion order.  A page without captions yields
    an empty list.
    """
    try:
        tracks = extract_caption_tracks(script_text)
    except NoCaptionsFound as exc:
        log.warning("No subtitles found for %s. (%s)", source, exc)
        return []

    chosen = select_tracks(tracks, language, prefer_auto_generated)
    log.debug(
        "%s: %d caption track(s), %d selected (lang:%s, auto:%s)",
        source, len(tracks), len(chosen), language, prefer_auto_generated,
    )
    if not chosen:
        return []

    session = session or build_session()
    results: list[SubtitleResult] = []
    outcomes = await asyncio.gather(
        *(
            fetch_track(t, session, results, source=source, timeout=timeout)
            for t in chosen
        ),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, UnknownSubtitleKind):
            raise outcome
        if isinstance(outcome, BaseException):
            log.warning("Subtitle task for %s failed: %r", source, outcome)
    return results


async def fetch_subtitles(
    page: Any,
    language: Optional[str] = None,
    prefer_auto_generated: bool = False,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> list[SubtitleResult]:
    """Fetch subtitles for the video currently loaded in Playwright *page*."""
    source = page.url
    log.debug("Fetching subtitles for %s,lang:%s...", source, language)
    script = await page.evaluate(PLAYER_SCRIPT_JS)
    return await fetch_tracks(
        script,
        language,
        prefer_auto_generated,
        session=session,
        source=source,
        timeout=timeout,
    )
