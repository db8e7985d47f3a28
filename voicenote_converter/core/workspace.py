"""Process-scoped temp directory with collision-free per-request file names.

WHY: Every conversion needs two scratch files (downloaded input, encoded
output). Several messages can be in flight at once, so names must never
collide, and files must not pile up when a request fails halfway.

HOW: TempWorkspace owns one directory (created lazily). temp_path()
builds "<epoch-ms>-<uuid4><ext>" names. request_files() is a context
manager that hands out an input/output pair and removes both on exit,
whatever happened inside the block.

RULES:
- Name uniqueness is the only thing preventing cross-request collisions
- Deletion is best-effort: a missing file or OSError is logged at debug
  level and swallowed, never raised to the caller
- The directory itself is left in place for the next request
"""

from __future__ import annotations

import contextlib
import logging
import time
import uuid
from pathlib import Path
from typing import Iterator, Tuple, Union

from voicenote_converter.config import VOICE_EXTENSION

logger = logging.getLogger(__name__)


class TempWorkspace:
    """Owner of the converter's scratch directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def ensure(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def temp_path(self, ext: str = "") -> Path:
        """Build a unique path inside the workspace (the file is not created).

        RULES:
        - ext may be given with or without the leading dot; "" means no suffix
        """
        if ext and not ext.startswith("."):
            ext = "." + ext
        name = "{}-{}{}".format(int(time.time() * 1000), uuid.uuid4(), ext)
        return self.root / name

    def discard(self, *paths: Path) -> None:
        """Delete the given files, ignoring any that are gone or undeletable."""
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.debug("Could not remove temp file %s: %s", path, exc)

    @contextlib.contextmanager
    def request_files(self, input_ext: str) -> Iterator[Tuple[Path, Path]]:
        """Yield (input_path, output_path) for one request and clean both up."""
        self.ensure()
        input_path = self.temp_path(input_ext)
        output_path = self.temp_path(VOICE_EXTENSION)
        try:
            yield input_path, output_path
        finally:
            self.discard(input_path, output_path)
