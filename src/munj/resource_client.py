from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .domain_types import DEFAULT_ENCODING
from .http_resource_client import HttpResourceClient
from .local_resources import LocalResourceClient
from .seq_core import Seq

URL_SCHEMES = ("http://", "https://")


class LineSource(Protocol):
    def open_lines(self, locator: str, encoding: str = DEFAULT_ENCODING) -> Seq[str]: ...


def is_url(locator: str) -> bool:
    return locator.strip().lower().startswith(URL_SCHEMES)


@dataclass
class Resources:
    """
    The one resource collaborator a pipeline talks to.

    Built once per process and passed into the expression namespace; HTTP
    locators go to ``http``, everything else to ``local``.
    """

    local: LocalResourceClient = field(default_factory=LocalResourceClient)
    http: LineSource = field(default_factory=HttpResourceClient)
    encoding: str = DEFAULT_ENCODING

    def open_lines(self, locator: str, encoding: str | None = None) -> Seq[str]:
        source: LineSource = self.http if is_url(locator) else self.local
        return source.open_lines(locator.strip(), encoding or self.encoding)

    def list_entries(self, path: str = ".", recursive: bool = False) -> Seq[Path]:
        return self.local.list_entries(path, recursive)
