"""
Single place for constants that are used across the package.
"""

from typing import Final

# appended to a track's ``baseUrl`` to get the json3 timed-text document
JSON3_FORMAT_PARAM: Final[str] = "&fmt=json3"

# inline <script> holding the player response (and the caption track list)
PLAYER_RESPONSE_PREFIX: Final[str] = "var ytInitialPlayerResponse"
CAPTION_TRACKS_KEY: Final[str] = "captionTracks"
ASR_KIND: Final[str] = "asr"

DEFAULT_OUTDIR: Final = "out"

# --------------------------- runtime defaults --------------------------- #
DEFAULT_HTTP_TIMEOUT: Final[float] = 30.0
DEFAULT_NAV_TIMEOUT_MS: Final[int] = 90_000
DEFAULT_VIEWPORT: Final[int] = 1280

ENV_LOGLEVEL: Final[str] = "YTSRT_LOGLEVEL"
ENV_HTTP_TIMEOUT: Final[str] = "YTSRT_HTTP_TIMEOUT"

# NOTE: static pool kept only as *fallback* when fake-useragent cannot reach
# its bundled data.
USER_AGENTS_POOL: Final[list[str]] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
]
