"""
Tiny façade over :pymod:`logging` so internal modules can do

```python
from yt_srt.logger import log
log.debug("Hi")
```

and end-users can tweak verbosity via the environment:

```bash
export YTSRT_LOGLEVEL=DEBUG
```
"""

from __future__ import annotations

import logging
import os
import pathlib
import sys

from rich.console import Console
from rich.logging import RichHandler

from yt_srt.constants import ENV_LOGLEVEL

LOG_FMT_FILE = "%(asctime)s  %(levelname)-8s  %(name)s › %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def _level_for(verbose: int) -> int:
    env = os.getenv(ENV_LOGLEVEL)
    if env:
        return getattr(logging, env.upper(), logging.INFO)
    return [logging.WARNING, logging.INFO, logging.DEBUG][min(max(verbose, 0), 2)]


def configure_logging(verbose: int = 0, log_file: pathlib.Path | None = None) -> None:
    """
    Initialise root logging once.  ``YTSRT_LOGLEVEL`` overrides *verbose*.
    Verbosity: 0 => WARNING, 1 => INFO, >=2 => DEBUG.
    """
    root = logging.getLogger()
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    console_level = _level_for(verbose)
    console_handler = RichHandler(
        console=Console(file=sys.stderr),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(console_level)
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FMT_FILE, DATE_FMT))
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if log_file is not None else console_level)
    # keep urllib3 / asyncio chatter out of the console unless asked for
    for name in ("urllib3", "asyncio"):
        logging.getLogger(name).setLevel(
            logging.DEBUG if verbose > 1 else logging.WARNING
        )


log = logging.getLogger("yt_srt")
