"""
Parse two-column CSV translation tables.

Each line of the source holds one translation: the database value in the
first column and the RDF value in the second. Lines with any other number of
columns are reported and skipped. There is no header row.
"""

from __future__ import annotations

import csv
import logging
from http.client import HTTPException
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from ..exceptions import TranslationLoadError
from ..io.resources import DEFAULT_ENCODING, DEFAULT_TIMEOUT, LoadContext, PathOrLocation, open_resource
from .models import EXPECTED_FIELD_COUNT, Accepted, RowOutcome, Skipped, Translation, TranslationTable

logger = logging.getLogger(__name__)


SkipCallback = Callable[[Skipped], None]
Dialect = Union[str, csv.Dialect, type]


def split_line(line: str, dialect: Dialect = "excel") -> List[str]:
    """Split a single CSV line into its fields.

    Parameters
    ----------
    line : str
        One line of CSV text without its line terminator.
    dialect : str or csv.Dialect, default "excel"
        Quoting rules passed to :func:`csv.reader`.

    Returns
    -------
    list of str
        The fields. An empty line yields an empty list.

    Raises
    ------
    csv.Error
        If the tokenizer rejects the line.
    """
    return next(csv.reader([line], dialect=dialect), [])


def parse_row(line_number: int, line: str, label: str, dialect: Dialect = "excel") -> RowOutcome:
    """Turn one source line into an :class:`Accepted` or :class:`Skipped` outcome."""
    try:
        fields = split_line(line, dialect)
    except csv.Error as e:
        logger.debug("CSV tokenizer rejected line %d in %s: %s", line_number, label, e)
        return Skipped(line_number, 0, label)
    if len(fields) != EXPECTED_FIELD_COUNT:
        return Skipped(line_number, len(fields), label)
    return Accepted(Translation(fields[0], fields[1]))


class TranslationTableParser:
    """Parse the contents of a CSV source into a :class:`TranslationTable`.

    The source is opened when the parser is created, so resolution and
    access errors are raised before any row is parsed.

    Parameters
    ----------
    source : ResourceRef, str, os.PathLike or text stream
        The CSV source. Streams remain owned by the caller and are not
        closed; sources opened from a location are closed after parsing.
    base : str or os.PathLike, optional
        Base for resolving relative locations. Defaults to the current
        working directory.
    encoding : str, default "utf-8"
        Text encoding of resources opened from a location.
    timeout : float, optional
        Network timeout in seconds. ``None`` blocks.
    on_skip : callable, optional
        Called with each :class:`Skipped` outcome, in source line order.
    dialect : str or csv.Dialect, default "excel"
        CSV quoting rules.

    Raises
    ------
    InvalidLocationError, ResourceNotFoundError, ResourceAccessError
        See :func:`PyD2RQ.io.open_resource`.
    """

    def __init__(
        self,
        source: Any,
        *,
        base: Optional[PathOrLocation] = None,
        encoding: str = DEFAULT_ENCODING,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        on_skip: Optional[SkipCallback] = None,
        dialect: Dialect = "excel",
    ) -> None:
        self._context: LoadContext = open_resource(source, base=base, encoding=encoding, timeout=timeout)
        self._on_skip = on_skip
        self._dialect = dialect
        self._consumed = False

    @property
    def label(self) -> str:
        """Diagnostic label of the source."""
        return self._context.label

    def close(self) -> None:
        """Release the source without parsing it."""
        self._consumed = True
        self._context.close()

    def __enter__(self) -> "TranslationTableParser":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def parse_translations(self) -> TranslationTable:
        """Read all lines and return the translations in source order.

        Returns
        -------
        TranslationTable
            Possibly empty; skipped rows are listed in its ``skipped``
            attribute.

        Raises
        ------
        TranslationLoadError
            If reading from the source fails. Translations read before the
            failure are discarded.
        RuntimeError
            If the parser was already used.
        """
        if self._consumed:
            raise RuntimeError(f"Translation table {self.label} has already been parsed")
        self._consumed = True

        translations: List[Translation] = []
        skipped: List[Skipped] = []
        with self._context as context:
            for line_number, line in self._read_lines(context):
                outcome = parse_row(line_number, line, context.label, self._dialect)
                if isinstance(outcome, Accepted):
                    translations.append(outcome.translation)
                else:
                    self._report(outcome)
                    skipped.append(outcome)

        logger.info(
            "Loaded %d translations from %s (%d lines skipped)",
            len(translations),
            self.label,
            len(skipped),
        )
        return TranslationTable(translations, skipped, self.label)

    def _read_lines(self, context: LoadContext) -> Iterator[Tuple[int, str]]:
        line_number = 0
        while True:
            try:
                line = context.readline()
            except (OSError, ValueError, HTTPException) as e:
                # UnicodeDecodeError is a ValueError, a truncated HTTP body an IncompleteRead
                raise TranslationLoadError(context.label, str(e)) from e
            if not line:
                return
            line_number += 1
            yield line_number, line.rstrip("\r\n")

    def _report(self, outcome: Skipped) -> None:
        logger.warning(
            "Skipping line %d with %d instead of %d columns in CSV file %s",
            outcome.line_number,
            outcome.field_count,
            EXPECTED_FIELD_COUNT,
            outcome.label,
        )
        if self._on_skip is not None:
            self._on_skip(outcome)


def load_translations(source: Any, **options: Any) -> TranslationTable:
    """Load a translation table in one call.

    Parameters
    ----------
    source : ResourceRef, str, os.PathLike or text stream
        The CSV source.
    **options
        Keyword arguments forwarded to :class:`TranslationTableParser`.

    Returns
    -------
    TranslationTable

    Examples
    --------
    >>> import io
    >>> table = load_translations(io.StringIO('"M","male"\\n"F","female"\\n'))
    >>> [t.as_tuple() for t in table]
    [('M', 'male'), ('F', 'female')]
    """
    return TranslationTableParser(source, **options).parse_translations()
