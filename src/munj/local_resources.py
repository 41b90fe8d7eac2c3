from __future__ import annotations

import codecs
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, TextIO
from urllib.parse import urlparse
from urllib.request import url2pathname

from .domain_types import DEFAULT_ENCODING
from .errors import ResourceError
from .seq_core import IterSeq, ListSeq, Seq

logger = logging.getLogger(__name__)

STDIN_LOCATOR = "-"


_NEWLINE = re.compile(r"\r\n|\r|\n")


def check_encoding(encoding: str) -> None:
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ResourceError(f"unknown encoding: {encoding}") from exc


def decode_lines(chunks: Iterable[bytes], encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """
    Decode a byte stream into lines without their terminators.

    Lines end at ``\\n``, ``\\r\\n`` or a lone ``\\r``, the same as text files
    opened with universal newlines. Undecodable bytes become U+FFFD instead
    of failing the read.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    buffered: list[str] = []
    for chunk in chunks:
        text = decoder.decode(chunk)
        if "\n" not in text and "\r" not in text:
            buffered.append(text)
            continue
        text = "".join(buffered) + text
        # a trailing \r may be the first half of a \r\n split across chunks
        held = text.endswith("\r")
        if held:
            text = text[:-1]
        *complete, rest = _NEWLINE.split(text)
        yield from complete
        buffered = [rest, "\r"] if held else [rest]
    text = "".join(buffered) + decoder.decode(b"", final=True)
    if text:
        *complete, rest = _NEWLINE.split(text)
        yield from complete
        if rest:
            yield rest


def _read_lines(handle: TextIO) -> Iterator[str]:
    with handle:
        for line in handle:
            yield line[:-1] if line.endswith("\n") else line


def _walk(directory: Path, recursive: bool) -> Iterator[Path]:
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        yield entry
        if recursive and entry.is_dir() and not entry.is_symlink():
            yield from _walk(entry, recursive)


@dataclass
class LocalResourceClient:
    """Files, directories and stdin, with paths taken relative to ``cwd``."""

    cwd: Path = field(default_factory=Path.cwd)
    home: Path = field(default_factory=Path.home)
    stdin: BinaryIO | None = None

    def resolve(self, locator: str) -> Path:
        text = locator.strip()
        if text.startswith("file://"):
            text = url2pathname(urlparse(text).path)
        # only the current user's home; ~user is left alone
        if text == "~" or text.startswith("~/"):
            text = str(self.home) + text[1:]
        path = Path(text)
        if not path.is_absolute():
            path = self.cwd / path
        return path

    def open_lines(self, locator: str, encoding: str = DEFAULT_ENCODING) -> Seq[str]:
        check_encoding(encoding)
        if locator == STDIN_LOCATOR:
            stdin = self.stdin if self.stdin is not None else sys.stdin.buffer
            logger.debug("reading stdin (%s)", encoding)
            return IterSeq(decode_lines(iter(stdin.readline, b""), encoding))

        path = self.resolve(locator)
        try:
            handle = open(path, encoding=encoding, errors="replace")
        except OSError as exc:
            raise ResourceError(f"unable to open {path}: {exc.strerror or exc}") from exc
        logger.debug("opened %s (%s)", path, encoding)
        return IterSeq(_read_lines(handle))

    def list_entries(self, path: str = ".", recursive: bool = False) -> Seq[Path]:
        """
        Entries under ``path`` sorted by name; with ``recursive`` each
        directory is followed by its own subtree. A plain file lists itself.
        """
        root = self.resolve(path)
        if not root.exists():
            raise ResourceError(f"no such file or directory: {root}")
        if not root.is_dir():
            return ListSeq([root])
        logger.debug("listing %s (recursive=%s)", root, recursive)
        return IterSeq(_walk(root, recursive))