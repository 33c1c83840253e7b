"""
Data model for translation tables.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, Optional, Tuple, Union, overload
from urllib.parse import unquote, urlsplit

import pandas as pd

from ..io.resources import STREAM_LABEL

if TYPE_CHECKING:
    from .table_translator import TableLookup


EXPECTED_FIELD_COUNT = 2


@dataclass(frozen=True)
class Translation:
    """A single database value to RDF value pair.

    Parameters
    ----------
    database_value : str
        The literal value as it appears in the database.
    rdf_value : str
        The value it is rewritten to in the RDF output.

    Empty strings are legal on either side; ``None`` is not.
    """

    database_value: str
    rdf_value: str

    def __post_init__(self) -> None:
        for name in ("database_value", "rdf_value"):
            value = getattr(self, name)
            if value is None:
                raise TypeError(f"Translation.{name} must not be None")
            if not isinstance(value, str):
                raise TypeError(
                    f"Translation.{name} must be a string, got {type(value).__name__}"
                )

    def as_tuple(self) -> Tuple[str, str]:
        return (self.database_value, self.rdf_value)


@dataclass(frozen=True)
class Accepted:
    """Row outcome for a line that yielded a translation."""

    translation: Translation


@dataclass(frozen=True)
class Skipped:
    """Row outcome for a line with the wrong number of fields.

    Parameters
    ----------
    line_number : int
        1-based physical line number in the source.
    field_count : int
        Number of fields the line was split into.
    label : str
        Diagnostic label of the source, usually its canonical location.
    """

    line_number: int
    field_count: int
    label: str = STREAM_LABEL

    @property
    def message(self) -> str:
        return (
            f"Skipping line {self.line_number} with {self.field_count} instead of "
            f"{EXPECTED_FIELD_COUNT} columns in CSV file {self.label}"
        )


RowOutcome = Union[Accepted, Skipped]


def _name_from_label(label: str, fallback: str = "translation_table") -> str:
    if label == STREAM_LABEL:
        return fallback
    stem = PurePosixPath(unquote(urlsplit(label).path)).stem
    return stem or fallback


class TranslationTable(Sequence):
    """Ordered, immutable collection of translations loaded from one source.

    The order of translations is the order of the source rows. Rows that were
    skipped are absent from the sequence and listed in :attr:`skipped`.
    Equality only considers the translations, not the diagnostics.
    """

    def __init__(
        self,
        translations: Iterable[Translation] = (),
        skipped: Iterable[Skipped] = (),
        label: str = STREAM_LABEL,
    ) -> None:
        self._translations: Tuple[Translation, ...] = tuple(translations)
        self._skipped: Tuple[Skipped, ...] = tuple(skipped)
        self._label = label

    @property
    def translations(self) -> Tuple[Translation, ...]:
        return self._translations

    @property
    def skipped(self) -> Tuple[Skipped, ...]:
        return self._skipped

    @property
    def label(self) -> str:
        return self._label

    @overload
    def __getitem__(self, index: int) -> Translation: ...

    @overload
    def __getitem__(self, index: slice) -> "TranslationTable": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return TranslationTable(self._translations[index], label=self._label)
        return self._translations[index]

    def __len__(self) -> int:
        return len(self._translations)

    def __iter__(self) -> Iterator[Translation]:
        return iter(self._translations)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TranslationTable):
            return self._translations == other._translations
        if isinstance(other, list):
            return list(self._translations) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._translations)

    def __repr__(self) -> str:
        return (
            f"TranslationTable(label={self._label!r}, translations={len(self)}, "
            f"skipped={len(self._skipped)})"
        )

    def to_frame(self, name: Optional[str] = None) -> pd.DataFrame:
        """Return the table as a two-column DataFrame.

        Parameters
        ----------
        name : str, optional
            Dataset name stored in ``df.attrs["dataset_name"]``. Defaults to
            the file name stem of the source location.

        Returns
        -------
        pandas.DataFrame
            Columns ``database_value`` and ``rdf_value`` (``string`` dtype),
            with provenance metadata in ``df.attrs["provenance"]``.
        """
        df = pd.DataFrame(
            {
                "database_value": pd.Series(
                    [t.database_value for t in self._translations], dtype="string"
                ),
                "rdf_value": pd.Series(
                    [t.rdf_value for t in self._translations], dtype="string"
                ),
            }
        )
        dataset_name = name.strip() if isinstance(name, str) and name.strip() else _name_from_label(self._label)
        provenance: Dict[str, Any] = {
            "dataset_name": dataset_name,
            "reader": "translation_table",
            "source_path": self._label,
            "row_count": len(self._translations),
            "skipped_row_count": len(self._skipped),
            "loaded_time_utc_iso": datetime.now(timezone.utc).isoformat(),
        }
        df.attrs["dataset_name"] = dataset_name
        df.attrs["provenance"] = provenance
        return df

    def translator(self) -> "TableLookup":
        """Return a two-way value lookup built from this table."""
        from .table_translator import TableLookup

        return TableLookup(self._translations)
