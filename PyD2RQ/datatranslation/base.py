"""
Base classes for value translation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import pandas as pd


class BaseValueTranslator(ABC):
    """Abstract base class for value translators.

    Value translators take a DataFrame and the name of one of its columns and
    return a copy in which the values of that column have been rewritten,
    e.g. from database values to RDF values.
    """

    @abstractmethod
    def translate(self, df: pd.DataFrame, column: str) -> pd.DataFrame:
        """Translate the values of one column.

        Parameters
        ----------
        df : pandas.DataFrame
            The DataFrame to translate.
        column : str
            Name of the column whose values are rewritten.

        Returns
        -------
        pandas.DataFrame
            A new DataFrame with the translated column. The input DataFrame
            is left unchanged and its attrs are preserved on the result.

        Raises
        ------
        ValueError
            If ``column`` is not present in ``df``.
        """
        raise NotImplementedError
