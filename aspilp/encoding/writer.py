"""Writing rendered encodings to disk or to a stream.

The writer is the only component that performs I/O. Failures are logged
and reported as ``False``; the in-memory model is never affected, so the
caller can retry or choose another destination.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from aspilp.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from aspilp.encoding.model import Model

__all__ = ["DEFAULT_WORK_DIR", "EncodingWriter"]

logger = logging.getLogger(__name__)

DEFAULT_WORK_DIR = Path(".") / "temp"


class EncodingWriter:
    """Saves encodings into a working directory created on demand."""

    def __init__(self, work_dir: Path | str | None = None) -> None:
        """Initialize the writer.

        Args:
            work_dir: Target directory (default: ``./temp``)
        """
        self.work_dir = Path(work_dir) if work_dir is not None else DEFAULT_WORK_DIR

    def path_for(self, name: str | Path) -> Path:
        """File path used for an encoding called ``name``.

        Only the final component of ``name`` is used, so every file lands
        directly in the working directory.
        """
        if name is None or not Path(name).name:
            raise InvalidArgumentError("name", "EncodingWriter.path_for", name)
        return self.work_dir.absolute() / Path(name).name

    def write(self, model: Model, stream: TextIO) -> bool:
        """Write the rendered model to an open text stream.

        Returns:
            True on success, False if the stream could not be written
        """
        if model is None:
            raise InvalidArgumentError("model", "EncodingWriter.write", model)
        if stream is None:
            raise InvalidArgumentError("stream", "EncodingWriter.write", stream)
        try:
            stream.write(model.render())
            stream.flush()
        except OSError as e:
            logger.error(f"Cannot stream encoding: {e}")
            return False
        return True

    def save(self, model: Model, name: str | Path) -> bool:
        """Render ``model`` into ``<work_dir>/<name>``.

        Args:
            model: Model (or problem) to render
            name: File name, typically the problem or grounding identifier

        Returns:
            True on success, False if the directory or file could not be
            created (see ``path_for`` for the target path)
        """
        if model is None:
            raise InvalidArgumentError("model", "EncodingWriter.save", model)
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create working directory '{path.parent}': {e}")
            return False
        try:
            with open(path, "w", encoding="utf-8") as f:
                if not self.write(model, f):
                    return False
        except OSError as e:
            logger.error(f"Cannot write to '{path.name}' (do we have rights?): {e}")
            return False
        logger.debug(f"Saved encoding to {path}")
        return True
