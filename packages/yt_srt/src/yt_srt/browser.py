"""Playwright bootstrap utilities."""

from __future__ import annotations

import contextlib
import inspect
from typing import AsyncIterator, Dict, Iterable, List, Optional, Tuple

from fake_headers import Headers                         # builds realistic header sets
from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from yt_srt.constants import DEFAULT_VIEWPORT
from yt_srt.session import pick_ua
from yt_srt.utils import sec_ch_headers

__all__ = ["anew_page", "build_headers"]


def build_headers(ua: str) -> Dict[str, str]:
    """Return merged default + Sec-CH headers for *ua*."""
    base = {
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "DNT": "1",
        "Sec-GPC": "1",
    }
    base.update(sec_ch_headers(ua))
    return base


# ---------------------------  asset-blocking ------------------------------- #
_BLOCK_MAP = {
    "img":    {"image"},
    "images": {"image"},
    "audio":  {"media"},
    "video":  {"media"},
    "media":  {"media"},
}


def _should_block(block: Iterable[str], resource_type: str) -> bool:
    to_block: set[str] = set()
    for key in block:
        to_block |= _BLOCK_MAP.get(key, {key})
    return resource_type in to_block


@contextlib.asynccontextmanager
async def anew_page(
    engine: str = "chromium",
    *,
    proxy: str | None = None,
    viewport_width: int = DEFAULT_VIEWPORT,
    extra_headers: dict[str, str] | None = None,
    cookies: Optional[list[dict]] = None,
    user_agent: Optional[str] = None,
    ua_browser: Optional[str] = None,
    ua_os: Optional[str] = None,
    block: Optional[List[str]] = None,
) -> AsyncIterator[Tuple[Browser, BrowserContext, Page]]:
    """
    Async context-manager yielding *(browser, context, page)*.

    Every call launches a headless browser with a fresh context so pages
    never share cookies; everything is closed on exit.
    """
    async with async_playwright() as pw:
        launcher = getattr(pw, engine)
        browser = await launcher.launch(
            headless=True, proxy={"server": proxy} if proxy else None
        )
        ua_str = user_agent or pick_ua(ua_browser, ua_os)
        hdrs = Headers(
            browser=ua_browser or "chrome",
            os=ua_os or "win",
            headers=True,
        ).generate()
        hdrs.pop("User-Agent", None)          # context user_agent wins
        hdrs.update(build_headers(ua_str))
        if extra_headers:
            hdrs.update(extra_headers)

        context = await browser.new_context(
            viewport={"width": viewport_width, "height": 720},
            user_agent=ua_str,
            extra_http_headers=hdrs,
        )
        if cookies:
            await context.add_cookies(cookies)
        page = await context.new_page()

        if block:
            async def _route_handler(route, request):
                fn = (
                    route.abort
                    if _should_block(block, request.resource_type)
                    else route.continue_
                )
                maybe = fn()
                if inspect.isawaitable(maybe):
                    await maybe

            await page.route("**/*", _route_handler)

        try:
            yield browser, context, page
        finally:
            with contextlib.suppress(Exception):
                await context.close()
            with contextlib.suppress(Exception):
                await browser.close()
