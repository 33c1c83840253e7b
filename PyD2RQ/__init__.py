"""
PyD2RQ: translation tables for relational-to-RDF mapping
========================================================

This package loads value-translation tables used while mapping relational
databases to RDF. A translation table is a two-column CSV file; each row maps
a literal database value to the RDF value it is rewritten to. Tables can be
read from local files, network resources or in-memory streams, and applied
to pandas DataFrames read from a database.

Subpackages
-----------

``io``
    Resolution of locations (relative references, paths, URLs) into open,
    labelled text streams.
``datatranslation``
    Translation table model, CSV loader and table-based value translators.

Errors raised by the package are defined in ``PyD2RQ.exceptions``.
"""

from .datatranslation import Translation, TranslationTable, TranslationTableParser, load_translations
from .exceptions import (
    D2RQError,
    InvalidLocationError,
    ResourceAccessError,
    ResourceNotFoundError,
    TranslationLoadError,
)

__all__ = [
    "io",
    "datatranslation",
    "exceptions",
    "Translation",
    "TranslationTable",
    "TranslationTableParser",
    "load_translations",
    "D2RQError",
    "InvalidLocationError",
    "ResourceAccessError",
    "ResourceNotFoundError",
    "TranslationLoadError",
]
