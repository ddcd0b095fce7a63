"""Public package API."""

from .converter import SrtConverter, SrtCue, SubtitleKind, SubtitleResult, convert, ms_to_hms
from .errors import (
    CaptionFormatError,
    InvalidURL,
    PageLoadError,
    NoCaptionsFound,
    UnknownSubtitleKind,
    YtSrtError,
)
from .fetcher import fetch_subtitles, fetch_tracks
from .store import LocalKeyValueStore, process_fetched_subtitles
from .tracks import CaptionTrack, extract_caption_tracks, select_tracks

__all__ = [
    "SrtConverter",
    "SrtCue",
    "SubtitleKind",
    "SubtitleResult",
    "convert",
    "ms_to_hms",
    "CaptionFormatError",
    "InvalidURL",
    "PageLoadError",
    "NoCaptionsFound",
    "UnknownSubtitleKind",
    "YtSrtError",
    "fetch_subtitles",
    "fetch_tracks",
    "LocalKeyValueStore",
    "process_fetched_subtitles",
    "CaptionTrack",
    "extract_caption_tracks",
    "select_tracks",
]
__version__ = "0.1.0"
