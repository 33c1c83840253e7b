"""
Value translation tables for PyD2RQ.

This module loads two-column CSV translation tables, which map literal
database values to the RDF values they are rewritten to, and applies them
to DataFrame columns.

The primary use case is rewriting column values read from a relational
database into RDF term values while mapping the database to a graph.
"""

# Data model
from .models import Accepted, RowOutcome, Skipped, Translation, TranslationTable

# Loading
from .csv_parser import TranslationTableParser, load_translations, parse_row, split_line

# Applying
from .base import BaseValueTranslator
from .table_translator import TableLookup, TableTranslator

__all__ = [
    "Accepted",
    "RowOutcome",
    "Skipped",
    "Translation",
    "TranslationTable",
    "TranslationTableParser",
    "load_translations",
    "parse_row",
    "split_line",
    "BaseValueTranslator",
    "TableLookup",
    "TableTranslator",
]
