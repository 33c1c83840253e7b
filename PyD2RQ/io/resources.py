"""Resolve and open translation table sources.

A source is either an already-open text stream or a location (a URL, a
relative reference, or a local path). Locations are resolved against a base
location and opened with :mod:`urllib.request`, so ``file:``, ``http:`` and
``https:`` URLs all work. The result is a :class:`LoadContext` holding the
open stream together with a diagnostic label used in warnings and errors.
"""

from __future__ import annotations

import codecs
import io
import logging
import os
import re
from dataclasses import dataclass
from http.client import HTTPException, IncompleteRead
from pathlib import Path
from typing import Any, Optional, TextIO, Union
from urllib.error import HTTPError, URLError
from urllib.parse import urljoin, urlsplit
from urllib.request import pathname2url, urlopen

from ..exceptions import InvalidLocationError, ResourceAccessError, ResourceNotFoundError

logger = logging.getLogger(__name__)


DEFAULT_ENCODING = "utf-8"
DEFAULT_TIMEOUT: Optional[float] = None
STREAM_LABEL = "<stream>"

# HTTP status codes reported as a missing resource
NOT_FOUND_STATUS_CODES = (404, 410)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_ILLEGAL_CHAR_RE = re.compile(r"[\s<>\"{}|\\^`\x00-\x1f\x7f]")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

PathOrLocation = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class InMemoryStream:
    """A caller-owned, already-open text stream."""

    handle: TextIO


@dataclass(frozen=True)
class Location:
    """A location string or local path still to be resolved and opened."""

    value: PathOrLocation


ResourceRef = Union[InMemoryStream, Location]


def as_resource_ref(source: Any) -> ResourceRef:
    """Coerce a plain source object into a :data:`ResourceRef`.

    Parameters
    ----------
    source : ResourceRef, str, os.PathLike or text stream
        Strings and path-like objects become a :class:`Location`; objects
        with a ``readline`` method become an :class:`InMemoryStream`.

    Returns
    -------
    ResourceRef

    Raises
    ------
    TypeError
        If ``source`` is none of the accepted kinds.
    """
    if isinstance(source, (InMemoryStream, Location)):
        return source
    if isinstance(source, (str, os.PathLike)):
        return Location(source)
    if hasattr(source, "readline"):
        return InMemoryStream(source)
    raise TypeError(
        f"Expected a location string, path or text stream, got {type(source).__name__}"
    )


@dataclass
class LoadContext:
    """Open stream plus diagnostic label for a single load.

    The stream is closed on exit only when ``owns_stream`` is True, i.e. when
    it was opened from a location. Caller-supplied streams are left open.
    """

    stream: TextIO
    label: str = STREAM_LABEL
    owns_stream: bool = False

    def readline(self) -> str:
        return self.stream.readline()

    def close(self) -> None:
        if self.owns_stream and not self.stream.closed:
            self.stream.close()

    def __enter__(self) -> "LoadContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _path_to_url(path: PathOrLocation, base_url: str) -> str:
    return urljoin(base_url, pathname2url(os.fspath(path)))


def _default_base() -> str:
    return Path.cwd().as_uri() + "/"


def _base_url(base: Optional[PathOrLocation]) -> str:
    """Normalize ``base`` to an absolute URL usable with ``urljoin``."""
    if base is None:
        return _default_base()
    if not isinstance(base, os.PathLike):
        scheme = urlsplit(base).scheme
        # One-letter schemes are Windows drive letters
        if len(scheme) > 1:
            return base
    path = Path(base).expanduser().resolve()
    url = path.as_uri()
    if path.is_dir() or os.fspath(base).endswith(("/", os.sep)):
        url += "/"
    return url


def _check_syntax(location: str) -> None:
    if not location.strip():
        raise InvalidLocationError(location, "empty location")
    match = _ILLEGAL_CHAR_RE.search(location)
    if match:
        raise InvalidLocationError(location, f"illegal character {match.group()!r}")
    if _BAD_PERCENT_RE.search(location):
        raise InvalidLocationError(location, "malformed percent-encoding")
    head = re.split(r"[/?#]", location, maxsplit=1)[0]
    if ":" in head:
        scheme = head.split(":", 1)[0]
        if not _SCHEME_RE.match(scheme):
            raise InvalidLocationError(location, f"invalid scheme {scheme!r}")


def resolve_location(location: PathOrLocation, base: Optional[PathOrLocation] = None) -> str:
    """Resolve a location against a base into a canonical absolute URL.

    Parameters
    ----------
    location : str or os.PathLike
        An absolute URL, a reference relative to ``base``, or a local path.
        Path-like objects are always treated as local file paths.
    base : str or os.PathLike, optional
        URL or local directory to resolve relative references against.
        Defaults to the current working directory.

    Returns
    -------
    str
        The canonical location, e.g. ``file:///data/table.csv``.

    Raises
    ------
    InvalidLocationError
        If ``location`` is not syntactically valid.
    """
    base_url = _base_url(base)
    if not isinstance(location, os.PathLike):
        _check_syntax(location)
    try:
        if isinstance(location, os.PathLike):
            resolved = _path_to_url(location, base_url)
        else:
            resolved = urljoin(base_url, location)
        # Raises on an unterminated IPv6 host or a non-numeric port
        urlsplit(resolved).port
    except ValueError as e:
        raise InvalidLocationError(os.fspath(location), str(e)) from e
    logger.debug("Resolved translation table location %s to %s", location, resolved)
    return resolved


def _open_url(url: str, timeout: Optional[float]):
    try:
        if timeout is None:
            return urlopen(url)
        return urlopen(url, timeout=timeout)
    except HTTPError as e:
        e.close()
        if e.code in NOT_FOUND_STATUS_CODES:
            raise ResourceNotFoundError(url) from e
        raise ResourceAccessError(url) from e
    except URLError as e:
        if isinstance(e.reason, FileNotFoundError):
            raise ResourceNotFoundError(url) from e
        raise ResourceAccessError(url) from e
    except (OSError, ValueError, HTTPException) as e:
        raise ResourceAccessError(url) from e


def _declared_length(response) -> Optional[int]:
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    try:
        return int(headers.get("Content-Length"))
    except (TypeError, ValueError):
        return None


class _LengthCheckedReader(io.BufferedIOBase):
    """Binary reader that fails on a body shorter than its declared Content-Length."""

    def __init__(self, response):
        super().__init__()
        self._response = response
        self._expected = _declared_length(response)
        self._received = 0

    def readable(self) -> bool:
        return True

    def read(self, size: Optional[int] = -1) -> bytes:
        return self._count(self._response.read(size), size)

    def read1(self, size: int = -1) -> bytes:
        read1 = getattr(self._response, "read1", None) or self._response.read
        return self._count(read1(size), size)

    def _count(self, data: bytes, size: Optional[int]) -> bytes:
        self._received += len(data)
        if (
            not data
            and size != 0
            and self._expected is not None
            and self._received < self._expected
        ):
            raise IncompleteRead(b"", self._expected - self._received)
        return data

    def close(self) -> None:
        try:
            self._response.close()
        finally:
            super().close()


def open_resource(
    source: Any,
    *,
    base: Optional[PathOrLocation] = None,
    encoding: str = DEFAULT_ENCODING,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> LoadContext:
    """Open a translation table source for line-by-line reading.

    Parameters
    ----------
    source : ResourceRef, str, os.PathLike or text stream
        What to open. See :func:`as_resource_ref`.
    base : str or os.PathLike, optional
        Base for resolving relative locations. Ignored for streams.
    encoding : str, default "utf-8"
        Text encoding of the fetched resource. Ignored for streams.
    timeout : float, optional
        Timeout in seconds for network retrieval. ``None`` blocks.

    Returns
    -------
    LoadContext
        The open stream and its diagnostic label. The canonical location is
        the label for resolved locations, ``"<stream>"`` for streams.

    Raises
    ------
    InvalidLocationError
        If the location cannot be resolved. Nothing is opened.
    ResourceNotFoundError
        If the resolved resource does not exist.
    ResourceAccessError
        If the resource cannot be opened for any other reason.
    """
    ref = as_resource_ref(source)
    if isinstance(ref, InMemoryStream):
        return LoadContext(ref.handle, STREAM_LABEL, owns_stream=False)

    url = resolve_location(ref.value, base)
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise ResourceAccessError(url, f"Unknown encoding {encoding!r} for translation table: {url}") from e

    response = _open_url(url, timeout)
    try:
        stream = io.TextIOWrapper(_LengthCheckedReader(response), encoding=encoding)
    except (OSError, ValueError, AttributeError) as e:
        response.close()
        raise ResourceAccessError(url) from e

    logger.debug("Opened translation table %s", url)
    return LoadContext(stream, url, owns_stream=True)
