from __future__ import annotations

import logging
from typing import Iterator, Mapping, Optional

import httpx

from .domain_types import DEFAULT_ENCODING
from .errors import ResourceError
from .local_resources import check_encoding, decode_lines
from .seq_core import IterSeq

logger = logging.getLogger(__name__)


class HttpResourceClient:
    def __init__(
        self,
        timeout_secs: float = 15.0,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout_secs
        self.headers = dict(headers or {})
        self.transport = transport

    def open_lines(self, url: str, encoding: str = DEFAULT_ENCODING) -> IterSeq[str]:
        """
        Stream the body of ``url`` as decoded lines.

        The request is sent and its status checked right away; the body is
        only read as lines are pulled.
        """
        check_encoding(encoding)
        client = httpx.Client(
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
            follow_redirects=True,
        )
        try:
            resp = client.send(client.build_request("GET", url), stream=True)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            client.close()
            raise ResourceError(f"unable to open url: {url} ({exc})") from exc
        logger.debug("streaming %s (%s)", url, encoding)
        return IterSeq(self._stream_lines(client, resp, encoding))

    @staticmethod
    def _stream_lines(client: httpx.Client, resp: httpx.Response, encoding: str) -> Iterator[str]:
        try:
            yield from decode_lines(resp.iter_bytes(), encoding)
        finally:
            resp.close()
            client.close()
