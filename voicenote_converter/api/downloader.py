"""Streamed HTTP download of attachment files.

WHY: Audio attachments can be tens of megabytes. Streaming to disk keeps
memory flat and lets ffmpeg read the file from a normal path.

HOW: Opens an httpx.AsyncClient per download, issues a streamed GET,
checks the status, and copies response chunks into the destination file.

RULES:
- timeout=None (the default) means the request may wait indefinitely
- Non-2xx responses raise DownloadError before anything is written
- A partially written destination file is left for the caller's cleanup
- Never log the URL: Telegram file URLs contain the bot token
- File writes are plain blocking writes on the event loop thread. One
  64 KiB chunk at a time is fine for a single small bot; a slow disk
  stalls concurrent updates while a chunk is written
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx

from voicenote_converter.core.errors import DownloadError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class HttpDownloader:
    """Download URLs to local files with httpx.

    RULES:
    - transport is injectable so tests can use httpx.MockTransport
    - Redirects are followed
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def download(self, url: str, destination: Path) -> int:
        """Fetch ``url`` into ``destination`` and return the number of bytes written."""
        written = 0
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with open(destination, "wb") as fh:
                        async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                            fh.write(chunk)
                            written += len(chunk)
        except httpx.HTTPStatusError as exc:
            raise DownloadError(
                "Download failed with HTTP {}".format(exc.response.status_code)
            ) from exc
        except httpx.HTTPError as exc:
            raise DownloadError("Download failed: {}".format(type(exc).__name__)) from exc
        except OSError as exc:
            raise DownloadError("Could not write download to {}".format(destination)) from exc

        logger.debug("Downloaded %d bytes to %s", written, destination)
        return written
