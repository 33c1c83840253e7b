"""Source resolution helpers for PyD2RQ.

This package turns translation table sources (in-memory streams, local paths
and URLs) into open, line-readable streams labelled for diagnostics.
"""

from .resources import (
    DEFAULT_ENCODING,
    DEFAULT_TIMEOUT,
    STREAM_LABEL,
    InMemoryStream,
    LoadContext,
    Location,
    ResourceRef,
    as_resource_ref,
    open_resource,
    resolve_location,
)

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_TIMEOUT",
    "STREAM_LABEL",
    "InMemoryStream",
    "LoadContext",
    "Location",
    "ResourceRef",
    "as_resource_ref",
    "open_resource",
    "resolve_location",
]
