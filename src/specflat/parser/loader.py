"""Load raw Swagger document text from a URL or a local file.

This module handles all I/O for fetching documents.  It returns the text
untouched; decoding JSON or YAML is left to
:func:`~specflat.parser.pipeline.decode_document`.

Local files are read through a *reader* callable so callers can substitute
an in-memory file system (a scaffolding tool's virtual FS, a test double).
A reader takes a path and returns its text.  It raises
:class:`FileNotFoundError` for a missing file, and may return ``None`` when
the file exists but has no readable content.

The public functions are:

* :func:`load_source` -- blocking load from a URL or file.
* :func:`load_source_async` -- the same, using :class:`httpx.AsyncClient`.
* :func:`is_yaml_source` -- format hint from the ``.yaml``/``.yml`` suffix.
* :func:`validate_source` -- user-input check for a path or URL.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Optional, Union

import httpx

from specflat.exceptions import SpecLoadError

logger = logging.getLogger(__name__)

Reader = Callable[[str], Optional[str]]

_HTTP_RE = re.compile(r"^https?://\S+")
_LOCAL_RE = re.compile(r"^\w+|^/|^\.\.?/")


def load_source(
    source: str,
    reader: Optional[Reader] = None,
    timeout: float = 30.0,
) -> str:
    """Load document text from an HTTP(S) URL or a local path.

    Args:
        source: A ``http://``/``https://`` URL or a file path.
        reader: Callable used to read local files.  Defaults to reading
            from disk as UTF-8.
        timeout: HTTP timeout in seconds.

    Returns:
        The raw document text.

    Raises:
        SpecLoadError: If the URL does not answer 200, the request fails,
            the file does not exist, or the file cannot be read.
    """
    if _HTTP_RE.match(source):
        return _load_from_url(source, timeout)
    return _load_from_file(source, reader or _read_file)


async def load_source_async(
    source: str,
    reader: Optional[Reader] = None,
    timeout: float = 30.0,
) -> str:
    """Async counterpart of :func:`load_source`.

    URLs are fetched with :class:`httpx.AsyncClient`.  Local files go
    through *reader* directly since it is a plain callable.
    """
    if not _HTTP_RE.match(source):
        return _load_from_file(source, reader or _read_file)

    logger.debug("fetching %s", source)
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(source)
    except httpx.RequestError as exc:
        raise SpecLoadError(f"failed to load swagger from: {source} ({exc})") from exc
    return _response_text(source, response)


def is_yaml_source(source: str) -> bool:
    """True when *source* names a YAML document by its suffix."""
    path = source.split("?", 1)[0].lower()
    return path.endswith((".yaml", ".yml"))


def validate_source(path: Optional[str]) -> Union[bool, str]:
    """Check a user-supplied document location before loading it.

    Returns:
        ``True`` when *path* is a URL or an existing local path, otherwise
        a message describing the problem.
    """
    if not path:
        return "Path is required"

    if _HTTP_RE.match(path):
        return True
    if _LOCAL_RE.match(path):
        if Path(path).exists():
            return True
        return f"The following path does not exist: {path}"
    return f"The following is not a valid path: {path}"


def _load_from_url(url: str, timeout: float) -> str:
    """Fetch document text from *url*; anything but HTTP 200 is a failure."""
    logger.debug("fetching %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.RequestError as exc:
        raise SpecLoadError(f"failed to load swagger from: {url} ({exc})") from exc
    return _response_text(url, response)


def _response_text(url: str, response: httpx.Response) -> str:
    if response.status_code != 200:
        logger.debug("get request returned status: %s", response.status_code)
        raise SpecLoadError(
            f"failed to load swagger from: {url} status: {response.status_code}"
        )
    return response.text


def _load_from_file(path: str, reader: Reader) -> str:
    """Read document text through *reader*.

    Raises:
        SpecLoadError: If the file is missing, unreadable, or *reader*
            returns ``None``.
    """
    logger.debug("reading %s", path)
    try:
        data = reader(path)
    except FileNotFoundError as exc:
        raise SpecLoadError(f"{path} doesn't exist") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecLoadError(f"failed to load swagger from: {path}") from exc

    if data is None:
        logger.debug("cannot read file contents %s", path)
        raise SpecLoadError(f"failed to load swagger from: {path}")
    return data


def _read_file(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")
