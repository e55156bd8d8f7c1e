"""Fetch JSON resources for the Earth orientation and XYS providers.

``http://`` and ``https://`` locations are retrieved with
:class:`httpx.AsyncClient`; anything else is treated as a local file path
and read on a worker thread so that the event loop is never blocked.
Errors are propagated to the caller so that the providers can decide how to
report them.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT: float = 120.0
"""Default HTTP timeout in seconds."""

JsonFetcher = Callable[[str], Awaitable[Any]]
"""Coroutine function ``fetcher(location) -> decoded JSON``."""


def is_remote(location: str) -> bool:
    """Return ``True`` if *location* is an HTTP(S) URL."""
    return location.startswith(("http://", "https://"))


async def fetch_json(location: str | Path, *, timeout: float = _DEFAULT_TIMEOUT) -> Any:
    """Fetch and decode a JSON document.

    Args:
        location: HTTP(S) URL or local filesystem path.
        timeout: HTTP timeout in seconds. Defaults to 120.

    Returns:
        The decoded JSON value.

    Raises:
        httpx.HTTPStatusError: If the server returns a non-2xx status.
        httpx.TransportError: On network-level failures (DNS, timeout, etc.).
        OSError: If a local file cannot be read.
        ValueError: If the content is not valid JSON.
    """
    location = str(location)

    if is_remote(location):
        logger.info("Downloading %s", location)
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(location)
            response.raise_for_status()
        return response.json()

    logger.debug("Reading %s", location)
    text = await asyncio.to_thread(Path(location).read_text, encoding="utf-8")
    return json.loads(text)
