"""
Persistence of converted subtitles and the public records handed back to
callers.

Any object with ``set_value(key, value)`` and ``get_public_url(key)`` can
act as the store; :class:`LocalKeyValueStore` keeps one JSON file per key.
"""
from __future__ import annotations

import json
import pathlib
from typing import Any, Iterable, Iterator, Optional, Protocol

from yt_srt.converter import SubtitleResult
from yt_srt.logger import log
from yt_srt.utils import safe_key


class KeyValueStore(Protocol):
    def set_value(self, key: str, value: Any) -> None: ...

    def get_public_url(self, key: str) -> str: ...


class LocalKeyValueStore:
    """Directory-backed store: ``<root>/<key>.json``."""

    def __init__(self, root: str | pathlib.Path):
        self.root = pathlib.Path(root).expanduser()
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> pathlib.Path:
        return self.root / f"{safe_key(key)}.json"

    def set_value(self, key: str, value: Any) -> None:
        self._path(key).write_text(
            json.dumps(value, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
        )

    def get_value(self, key: str) -> Any:
        p = self._path(key)
        return json.loads(p.read_text(encoding="utf-8")) if p.exists() else None

    def get_public_url(self, key: str) -> str:
        return self._path(key).resolve().as_uri()


def subtitle_key(video_id: str, result: SubtitleResult) -> str:
    return f"subtitles_{video_id}_{result.language}_{result.kind.value}"


def unique_names(names: Iterable[str]) -> Iterator[str]:
    """Yield *names*, suffixing repeats with ``_2``, ``_3``, ... in order."""
    seen: dict[str, int] = {}
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        yield name if seen[name] == 1 else f"{name}_{seen[name]}"


def process_fetched_subtitles(
    video_id: str,
    results: Iterable[SubtitleResult],
    *,
    store: Optional[KeyValueStore] = None,
) -> list[dict]:
    """Return ``{srt, srtUrl, type, language}`` records, saving to *store* first."""
    results = list(results)
    keys = unique_names(subtitle_key(video_id, r) for r in results)
    records = []
    for res, key in zip(results, keys):
        srt_url = None
        if store is not None:
            log.debug(
                "Saving subtitles for %s, lang:%s, type:%s to store, id=%s",
                video_id, res.language, res.kind.value, key,
            )
            store.set_value(
                key,
                {"subtitles": res.srt, "type": res.kind.value, "language": res.language},
            )
            srt_url = store.get_public_url(key)
        records.append(
            {
                "srt": res.srt,
                "srtUrl": srt_url,
                "type": res.kind.value,
                "language": res.language,
            }
        )
    return records
