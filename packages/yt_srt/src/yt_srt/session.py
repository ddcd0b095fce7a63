"""
HTTP identity helpers - cookies, User-Agent and the ``requests`` session
used to download caption documents.
"""

from __future__ import annotations

import json
import pathlib
import random
from typing import List, Optional

import requests
from fake_useragent import UserAgent

from yt_srt.constants import USER_AGENTS_POOL
from yt_srt.logger import log
from yt_srt.utils import sec_ch_headers


def load_cookie_file(path: str | pathlib.Path) -> List[dict]:
    """Return the cookie list stored in *path* (browser-export JSON).

    A missing file means "no cookies".  A file that holds anything but a
    list of objects is rejected with ``ValueError``.
    """
    p = pathlib.Path(path).expanduser()
    if not p.is_file():
        return []
    jar = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(jar, list) or not all(isinstance(c, dict) for c in jar):
        raise ValueError(f"{p} is not a JSON list of cookie objects")
    return jar


def pick_ua(browser: str | None = None, os: str | None = None) -> str:
    """Return a random real-world User-Agent, optionally filtered."""
    try:
        ua_src = UserAgent(
            browsers=[browser] if browser else None,
            os=[os] if os else None,
        )
        return ua_src.random
    except Exception as exc:  # noqa: BLE001
        log.warning("fake-useragent failed (%s) - using fallback UA", exc)
        return random.choice(USER_AGENTS_POOL)


def build_session(
    cookies: Optional[list[dict]] = None,
    *,
    user_agent: str | None = None,
    ua_browser: str | None = None,
    ua_os: str | None = None,
    proxy: str | None = None,
) -> requests.Session:
    """Return a ``requests.Session`` dressed like a regular browser.

    *cookies* are Playwright-style dicts (``name``/``value``/``domain``) so
    the jar of a rendered page can be handed over unchanged.  Pass the
    page's *user_agent* to keep both identities identical; otherwise one is
    picked with *ua_browser*/*ua_os*.
    """
    session = requests.Session()
    ua = user_agent or pick_ua(ua_browser, ua_os)
    session.headers.update({"User-Agent": ua, "Accept-Language": "en-US,en;q=0.9"})
    session.headers.update(sec_ch_headers(ua))
    for c in cookies or []:
        session.cookies.set(
            c.get("name"),
            c.get("value"),
            domain=c.get("domain", ""),
            path=c.get("path", "/"),
        )
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
    return session
