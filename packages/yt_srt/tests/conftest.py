"""
Shared fixtures: canned player scripts, caption documents and an in-memory
stand-in for ``requests.Session`` so nothing touches the network.
"""
from __future__ import annotations

import json

import pytest
import requests


def player_script(tracks: list[dict]) -> str:
    """Return a ``ytInitialPlayerResponse`` script embedding *tracks*."""
    payload = {
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": tracks,
                "audioTracks": [{"captionTrackIndices": [0, 1]}],
            }
        },
        "videoDetails": {"videoId": "dQw4w9WgXcQ"},
    }
    return f"var ytInitialPlayerResponse = {json.dumps(payload)};var meta = [];"


def track(lang: str, *, asr: bool = False, name: str | None = None) -> dict:
    entry = {
        "baseUrl": f"https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang={lang}"
        + ("&kind=asr" if asr else ""),
        "languageCode": lang,
        "name": {"runs": [{"text": name or lang}]},
    }
    if asr:
        entry["kind"] = "asr"
    return entry


class FakeResponse:
    def __init__(self, payload=None, *, status: int = 200, text: str | None = None):
        self._payload = payload
        self.status_code = status
        self.text = text if text is not None else json.dumps(payload)

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Route ``get(url)`` to canned responses; exceptions are raised."""

    def __init__(self, routes: dict[str, object] | None = None, default=None):
        self.routes = routes or {}
        self.default = default
        self.calls: list[str] = []

    def get(self, url: str, timeout: float | None = None):
        self.calls.append(url)
        for needle, outcome in self.routes.items():
            if needle in url:
                break
        else:
            outcome = self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def tmp_cwd(tmp_path, monkeypatch):
    """Run each test in an isolated tmp dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("YTSRT_LOGLEVEL", raising=False)
    monkeypatch.delenv("YTSRT_HTTP_TIMEOUT", raising=False)
    yield


@pytest.fixture
def caption_doc():
    return {
        "wireMagic": "pb3",
        "events": [
            {"tStartMs": 0, "dDurationMs": 1000, "segs": [{"utf8": "Hello"}]},
            {"tStartMs": 1000, "dDurationMs": 1500, "segs": [{"utf8": "World\n!"}]},
        ],
    }


@pytest.fixture
def three_tracks():
    return [track("en", asr=True), track("en"), track("fr", asr=True)]
