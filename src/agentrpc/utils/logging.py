from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Union[str, int] = "INFO", stream: Optional[object] = None) -> logging.Logger:
    """
    Install a single stream handler on the `agentrpc` logger.

    Calling it again replaces the handler instead of stacking another one.
    """
    root = logging.getLogger("agentrpc")
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False
    return root
