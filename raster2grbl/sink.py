"""Output sinks for generated programs (File + Memory)

Keep this small and explicit. FileSink writes the program to disk.
MemorySink is for unit tests and previews and simply collects lines.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .errors import OutputOpenError

logger = logging.getLogger(__name__)


class SinkBase:
    def open(self):
        raise NotImplementedError

    def write_line(self, line: str):
        raise NotImplementedError

    def close(self):
        raise NotImplementedError

    @property
    def name(self) -> str:
        return ""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class FileSink(SinkBase):
    """Writes lines to a text file, created (or truncated) on open.

    The target directory must already exist; a missing directory or a
    permission problem raises OutputOpenError and leaves nothing behind.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._fh = None

    @property
    def name(self) -> str:
        return str(self.path)

    def open(self):
        try:
            self._fh = open(self.path, "w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise OutputOpenError(f"Cannot open output file {self.path}: {exc}") from exc
        logger.debug("Opened %s", self.path)

    def write_line(self, line: str):
        if self._fh is None:
            raise OutputOpenError(f"Output file {self.path} is not open")
        try:
            self._fh.write(line + "\n")
        except OSError as exc:
            raise OutputOpenError(f"Cannot write output file {self.path}: {exc}") from exc

    def close(self):
        """Flush and close the file.

        Buffered data is written here, so a full disk usually shows up on
        close rather than on write_line.
        """
        if self._fh is None:
            return
        try:
            if not self._fh.closed:
                self._fh.close()
        except OSError as exc:
            raise OutputOpenError(f"Cannot write output file {self.path}: {exc}") from exc
        finally:
            self._fh = None


class MemorySink(SinkBase):
    """Collects lines in memory.

    Usage:
        s = MemorySink()
        encode(image, profile, s)
        print(s.text)
    """

    def __init__(self, name: str = "<memory>"):
        self._name = name
        self._lines: List[str] = []
        self._open = False
        self.closed_count = 0

    @property
    def name(self) -> str:
        return self._name

    def open(self):
        self._lines = []
        self._open = True

    def write_line(self, line: str):
        if not self._open:
            raise OutputOpenError(f"{self._name} is not open")
        self._lines.append(line)

    def close(self):
        self._open = False
        self.closed_count += 1

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "".join(line + "\n" for line in self._lines)


def sink_for(target: Optional[Union[str, Path, SinkBase]]) -> SinkBase:
    """Return ``target`` if it is a sink, otherwise a FileSink for the path."""
    if isinstance(target, SinkBase):
        return target
    if target is None:
        return MemorySink()
    return FileSink(target)
