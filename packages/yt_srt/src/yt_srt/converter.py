"""yt_srt.converter – turn a json3 timed-text document into SubRip text.

YouTube serves every caption track as ``{"events": [...]}`` when asked for
``fmt=json3``.  Each event with ``segs`` is one cue; events without it only
carry window/positioning data and are ignored.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping

from .errors import CaptionFormatError, UnknownSubtitleKind

__all__ = [
    "SubtitleKind",
    "SrtCue",
    "SubtitleResult",
    "SrtConverter",
    "convert",
    "ms_to_hms",
]

log = logging.getLogger("yt_srt.converter")


class SubtitleKind(str, Enum):
    AUTO_GENERATED = "auto_generated"
    USER_GENERATED = "user_generated"

    @classmethod
    def coerce(cls, value: "SubtitleKind | str") -> "SubtitleKind":
        """Return the member for *value* or raise :class:`UnknownSubtitleKind`."""
        try:
            return cls(value)
        except ValueError:
            raise UnknownSubtitleKind(f"Unknown subtitles type {value!r}") from None


# ---------------------------------------------------------------------------
# Timestamp formatting
# ---------------------------------------------------------------------------

def ms_to_hms(ms: int) -> str:
    """Return *ms* as an SRT timestamp ``HH:MM:SS,mmm``.

    Hours are padded to two digits but never truncated, so 100+ hour
    offsets print every digit.
    """
    ms = int(ms)
    if ms < 0:
        raise ValueError(f"negative timestamp: {ms}")
    total_sec, frac = divmod(ms, 1000)
    hrs, rest = divmod(total_sec, 3600)
    mins, sec = divmod(rest, 60)
    return f"{hrs:02d}:{mins:02d}:{sec:02d},{frac:03d}"


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SrtCue:
    index: int
    start_ms: int
    end_ms: int
    text: str

    def render(self) -> str:
        return (
            f"{self.index}\n"
            f"{ms_to_hms(self.start_ms)} --> {ms_to_hms(self.end_ms)}\n"
            f"{self.text}\n\n"
        )


@dataclass(frozen=True)
class SubtitleResult:
    """One converted caption track."""

    language: str
    kind: SubtitleKind
    srt: str

    def __post_init__(self) -> None:
        # frozen → bypass __setattr__ to store the normalised enum
        object.__setattr__(self, "kind", SubtitleKind.coerce(self.kind))


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------

def _event_text(segs: Any) -> str:
    if not isinstance(segs, list):
        raise CaptionFormatError(f"'segs' must be a list, got {type(segs).__name__}")
    parts = []
    for seg in segs:
        if not isinstance(seg, Mapping):
            raise CaptionFormatError("caption segment is not an object")
        text = seg.get("utf8")
        if text is None:
            continue
        if not isinstance(text, str):
            raise CaptionFormatError(f"'utf8' must be a string, got {type(text).__name__}")
        parts.append(text)
    return "".join(parts).replace("\n", " ")


class SrtConverter:
    """Convert one json3 caption document for *language* into SRT text.

    The kind is validated up front; anything but the two
    :class:`SubtitleKind` values is a caller bug and raises immediately.
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        language: str,
        kind: SubtitleKind | str = SubtitleKind.AUTO_GENERATED,
    ) -> None:
        self.kind = SubtitleKind.coerce(kind)
        self.language = language
        self._doc = document
        self.srt: str | None = None

    def _events(self) -> list:
        if not isinstance(self._doc, Mapping):
            raise CaptionFormatError("caption document is not a JSON object")
        events = self._doc.get("events")
        if not isinstance(events, list):
            raise CaptionFormatError("caption document has no 'events' list")
        return events

    def cues(self) -> Iterator[SrtCue]:
        """Yield cues in event order, numbered from 1 without gaps."""
        index = 1
        for event in self._events():
            if not isinstance(event, Mapping) or "segs" not in event:
                continue
            line = _event_text(event["segs"])
            if not line.strip():
                continue
            start, duration = event.get("tStartMs"), event.get("dDurationMs")
            if start is None or duration is None:
                log.debug("Skip cue without timing (%s): %r", self.language, line)
                continue
            try:
                start, duration = int(start), int(duration)
            except (TypeError, ValueError) as exc:
                raise CaptionFormatError(f"bad cue timing: {exc}") from exc
            yield SrtCue(index, start, start + duration, line)
            index += 1

    def convert(self) -> str:
        self.srt = "".join(cue.render() for cue in self.cues())
        return self.srt

    def to_result(self) -> SubtitleResult:
        srt = self.srt if self.srt is not None else self.convert()
        return SubtitleResult(self.language, self.kind, srt)


def convert(
    document: Mapping[str, Any],
    language: str,
    kind: SubtitleKind | str = SubtitleKind.AUTO_GENERATED,
) -> str:
    """Shortcut for ``SrtConverter(document, language, kind).convert()``."""
    return SrtConverter(document, language, kind).convert()
