from __future__ import annotations

import logging
from pathlib import Path

from .errors import OutputWriteError

logger = logging.getLogger(__name__)


def write_source(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write the generated file through a temporary sibling so a failure
    never leaves a truncated target behind.
    """
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(content, encoding=encoding)
        tmp.replace(path)
    except OSError as e:
        try:
            tmp.unlink()
        except OSError:
            pass
        raise OutputWriteError(path, str(e)) from e
    logger.debug("Wrote %d chars to %s", len(content), path)


__all__ = ["write_source"]
