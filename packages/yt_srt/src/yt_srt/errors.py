"""Domain-specific exceptions."""


class YtSrtError(Exception):
    """Base class for all yt-srt errors."""


class InvalidURL(YtSrtError):
    """URL does not point at a single YouTube video."""


class NoCaptionsFound(YtSrtError):
    """The page carries no parsable ``captionTracks`` list."""


class CaptionFormatError(YtSrtError):
    """A fetched caption document does not look like json3."""


class UnknownSubtitleKind(YtSrtError):
    """A subtitle kind other than auto/user generated was requested."""


class PageLoadError(YtSrtError):
    """The watch page could not be loaded (network, HTTP status, browser)."""
