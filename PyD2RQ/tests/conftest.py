"""Shared fixtures for PyD2RQ tests."""

import sqlite3
from pathlib import Path

import pandas as pd
import pytest


class SQLiteDatabase:
    """A small wrapper around an in-memory SQLite database for testing."""

    def __init__(self):
        self.connection = sqlite3.connect(":memory:")

    def execute_sql(self, sql):
        """Run one or more SQL statements separated by semicolons."""
        self.connection.executescript(sql)
        self.connection.commit()

    def execute_script(self, path):
        """Run the SQL statements stored in a file."""
        self.execute_sql(Path(path).read_text(encoding="utf-8"))

    def select_value(self, sql):
        """Return the first column of the first row, or None if there are no rows."""
        cursor = self.connection.execute(sql)
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
        return None if row is None else row[0]

    def select_string(self, sql):
        value = self.select_value(sql)
        return None if value is None else str(value)

    def read_frame(self, sql, name):
        df = pd.read_sql_query(sql, self.connection)
        df.attrs["dataset_name"] = name
        return df

    def close(self):
        self.connection.close()


@pytest.fixture
def database():
    """Create an empty in-memory database, closed after the test."""
    db = SQLiteDatabase()
    yield db
    db.close()
