"""
Value translation using a loaded translation table.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

import pandas as pd

from .base import BaseValueTranslator
from .models import Translation, TranslationTable

logger = logging.getLogger(__name__)


DIRECTIONS = ("to_rdf", "to_database")


class TableLookup:
    """Two-way lookup over a sequence of translations.

    If several translations share a key, the one appearing last wins.
    """

    def __init__(self, translations: Iterable[Translation]) -> None:
        self._rdf_by_db: Dict[str, str] = {}
        self._db_by_rdf: Dict[str, str] = {}
        for translation in translations:
            self._rdf_by_db[translation.database_value] = translation.rdf_value
            self._db_by_rdf[translation.rdf_value] = translation.database_value

    def __len__(self) -> int:
        return len(self._rdf_by_db)

    def to_rdf(self, database_value: Optional[str]) -> Optional[str]:
        """Return the RDF value for a database value, or None if unmapped."""
        if database_value is None:
            return None
        return self._rdf_by_db.get(database_value)

    def to_database(self, rdf_value: Optional[str]) -> Optional[str]:
        """Return the database value for an RDF value, or None if unmapped."""
        if rdf_value is None:
            return None
        return self._db_by_rdf.get(rdf_value)


class TableTranslator(BaseValueTranslator):
    """Rewrite column values through a translation table.

    Values without a translation become missing (``pd.NA``), mirroring a
    mapping engine that produces no term for an untranslatable value.
    Non-string values are compared by their string form.
    """

    def __init__(self, table: TranslationTable, direction: str = "to_rdf") -> None:
        """Initialize the table translator.

        Parameters
        ----------
        table : TranslationTable
            The loaded translation table.
        direction : str, optional
            ``"to_rdf"`` maps database values to RDF values, ``"to_database"``
            maps back. Default is ``"to_rdf"``.
        """
        if direction not in DIRECTIONS:
            raise ValueError(
                f"Unsupported translation direction: '{direction}'. Expected one of {DIRECTIONS}."
            )

        self.table = table
        self.direction = direction
        self._lookup = table.translator()

    def translate_value(self, value: Any) -> Optional[str]:
        """Translate a single value; missing or unmapped values give None."""
        if value is None or (not isinstance(value, (list, tuple, dict)) and pd.isna(value)):
            return None
        convert = self._lookup.to_rdf if self.direction == "to_rdf" else self._lookup.to_database
        return convert(str(value))

    def translate(self, df: pd.DataFrame, column: str) -> pd.DataFrame:
        """Translate the values of ``column`` according to the table.

        Parameters
        ----------
        df : pandas.DataFrame
            The DataFrame to translate.
        column : str
            Column whose values are rewritten.

        Returns
        -------
        pandas.DataFrame
            A copy of ``df`` with ``column`` translated to ``string`` dtype.
            A provenance entry is appended to ``attrs["provenance"]``.

        Raises
        ------
        ValueError
            If ``column`` is not in ``df``.
        """
        if column not in df.columns:
            raise ValueError(f"Column '{column}' not found in DataFrame")

        source = df[column]
        translated = source.map(self.translate_value).astype("string")

        present = source.notna()
        unmapped = int((translated.isna() & present).sum())
        mapped = int(present.sum()) - unmapped

        dataset_name = df.attrs.get("dataset_name", "<unnamed>")
        logger.info(
            "Translated %d values in column '%s' of dataset '%s' using %s",
            mapped,
            column,
            dataset_name,
            self.table.label,
        )
        if unmapped:
            logger.warning(
                "%d values in column '%s' of dataset '%s' have no translation in %s",
                unmapped,
                column,
                dataset_name,
                self.table.label,
            )

        translated_df = df.copy()
        translated_df[column] = translated

        attrs = dict(df.attrs)
        existing = attrs.get("provenance")
        if existing is None:
            provenance = []
        elif isinstance(existing, list):
            provenance = list(existing)
        else:
            provenance = [existing]
        provenance.append(
            {
                "op": "value_translate",
                "params": {
                    "column": column,
                    "direction": self.direction,
                    "table": self.table.label,
                    "translated": mapped,
                    "unmapped": unmapped,
                    "translator": self.__class__.__name__,
                },
                "ts": datetime.now(timezone.utc).isoformat(),
            }
        )
        attrs["provenance"] = provenance
        translated_df.attrs = attrs

        return translated_df
