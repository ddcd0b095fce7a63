"""
End-to-end flows used by the CLI: load a watch page, fetch its captions and
publish the results; or re-convert json3 files already on disk.
"""
from __future__ import annotations

import asyncio
import json
import pathlib
from typing import Iterable, Optional

import requests
from playwright.async_api import Error as PlaywrightError

from yt_srt.browser import anew_page
from yt_srt.constants import DEFAULT_NAV_TIMEOUT_MS, DEFAULT_OUTDIR
from yt_srt.converter import SrtConverter, SubtitleKind, SubtitleResult
from yt_srt.errors import CaptionFormatError, PageLoadError
from yt_srt.fetcher import http_timeout, fetch_subtitles, fetch_tracks
from yt_srt.logger import log
from yt_srt.session import build_session, pick_ua
from yt_srt.store import LocalKeyValueStore, process_fetched_subtitles, unique_names
from yt_srt.tracks import find_player_script
from yt_srt.utils import safe_key, video_id, watch_url

__all__ = ["grab_async", "write_srt_files", "iter_json_files", "convert_existing"]


def write_srt_files(
    vid: str, results: Iterable[SubtitleResult], out_dir: pathlib.Path
) -> list[pathlib.Path]:
    """Write each result to ``<out>/<vid>.<lang>.<kind>.srt``.

    Repeated language/kind pairs get a ``_2``, ``_3``, ... stem suffix.
    """
    results = list(results)
    stems = unique_names(f"{vid}.{r.language}.{r.kind.value}" for r in results)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for res, stem in zip(results, stems):
        dst = out_dir / safe_key(f"{stem}.srt")
        dst.write_text(res.srt, encoding="utf-8")
        log.info("✔ saved %s", dst.name)
        written.append(dst)
    return written


async def grab_async(
    url: str,
    *,
    language: Optional[str] = None,
    prefer_auto_generated: bool = False,
    out: Optional[pathlib.Path] = None,
    save: bool = True,
    srt_files: bool = False,
    fast_http: bool = False,
    proxy: str | None = None,
    cookies: Optional[list[dict]] = None,
    ua_browser: str | None = None,
    ua_os: str | None = None,
    timeout: float | None = None,
    block: Optional[list[str]] = None,
) -> list[dict]:
    """Fetch the captions of *url* and return their public records."""
    vid = video_id(url)
    page_url = watch_url(vid)
    out = out or pathlib.Path(DEFAULT_OUTDIR)
    # one identity for the page load and the caption downloads
    ua = pick_ua(ua_browser, ua_os)

    if fast_http:
        # plain HTTP: no JS, but the player response is inlined server-side
        session = build_session(cookies, user_agent=ua, proxy=proxy)
        try:
            resp = await asyncio.to_thread(
                session.get, page_url, timeout=timeout or http_timeout()
            )
            resp.raise_for_status()
        except requests.exceptions.RequestException as exc:
            log.warning("Unable to load %s\nReason:%s", page_url, exc)
            raise PageLoadError(f"Unable to load {page_url}: {exc}") from exc
        results = await fetch_tracks(
            find_player_script(resp.text),
            language,
            prefer_auto_generated,
            session=session,
            source=page_url,
            timeout=timeout,
        )
    else:
        try:
            async with anew_page(
                proxy=proxy,
                cookies=cookies,
                user_agent=ua,
                block=block,
            ) as (_, ctx, page):
                await page.goto(
                    page_url, wait_until="domcontentloaded", timeout=DEFAULT_NAV_TIMEOUT_MS
                )
                session = build_session(await ctx.cookies(), user_agent=ua, proxy=proxy)
                results = await fetch_subtitles(
                    page, language, prefer_auto_generated, session=session, timeout=timeout
                )
        except PlaywrightError as exc:
            log.warning("Unable to load %s\nReason:%s", page_url, exc)
            raise PageLoadError(f"Unable to load {page_url}: {exc}") from exc

    log.info("%s: %d subtitle track(s) converted", vid, len(results))
    if srt_files:
        write_srt_files(vid, results, out)
    store = LocalKeyValueStore(out) if save else None
    return process_fetched_subtitles(vid, results, store=store)


# ---------------------------------------------------------------------------
# Offline conversion
# ---------------------------------------------------------------------------

def iter_json_files(path: pathlib.Path | str) -> Iterable[pathlib.Path]:
    """Yield every *.json* file under *path* (file or directory)."""
    p = pathlib.Path(path).expanduser()
    if p.is_file() and p.suffix.lower() in (".json", ".json3"):
        yield p
    elif p.is_dir():
        yield from sorted(p.rglob("*.json"))
        yield from sorted(p.rglob("*.json3"))


def convert_existing(
    src: pathlib.Path | str,
    out_dir: pathlib.Path,
    *,
    language: str = "und",
    kind: SubtitleKind | str = SubtitleKind.AUTO_GENERATED,
) -> list[pathlib.Path]:
    """Convert saved json3 document(s) under *src* to ``.srt`` in *out_dir*.

    Unreadable or malformed files are logged and skipped.
    """
    kind = SubtitleKind.coerce(kind)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for jfile in iter_json_files(src):
        try:
            doc = json.loads(jfile.read_text(encoding="utf-8"))
            srt = SrtConverter(doc, language, kind).convert()
        except (OSError, ValueError, CaptionFormatError) as exc:
            log.warning("Skip unreadable caption file %s (%s)", jfile, exc)
            continue
        if not srt:
            log.warning("No cues in %s", jfile)
            continue
        dst = out_dir / jfile.with_suffix(".srt").name
        dst.write_text(srt, encoding="utf-8")
        log.info("✔ converted %s → %s", jfile.name, dst.name)
        written.append(dst)
    return written
