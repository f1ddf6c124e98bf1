from __future__ import annotations
import logging

import requests

from huffpack.config import DEFAULT_HTTP_TIMEOUT

logger = logging.getLogger(__name__)


class ServiceClient:
    """Talks to a running ``huffpack serve`` instance."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post(self, route: str, data: bytes, filename: str) -> bytes:
        url = f"{self.base_url}/{route}"
        logger.debug("POST %s (%d bytes)", url, len(data))
        response = requests.post(
            url=url,
            files={"upload_file": (filename, data, "application/octet-stream")},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.content

    def compress(self, data: bytes, filename: str = "upload") -> bytes:
        return self._post("compress", data, filename)

    def decompress(self, container: bytes, filename: str = "upload.huf") -> bytes:
        return self._post("decompress", container, filename)
