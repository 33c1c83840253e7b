"""Shared fixtures for data translation tests."""

import pandas as pd
import pytest

from PyD2RQ.datatranslation import Skipped, Translation, TranslationTable


@pytest.fixture
def mixed_csv_text():
    """CSV text with two valid rows followed by a three-column row."""
    return '"foo","bar"\n"baz","qux"\n"x","y","z"\n'


@pytest.fixture
def gender_csv_text():
    """A translation table for gender codes."""
    return (
        "M,http://example.org/gender/male\n"
        "F,http://example.org/gender/female\n"
        "X,http://example.org/gender/other\n"
    )


@pytest.fixture
def gender_csv_file(tmp_path, gender_csv_text):
    """Write the gender translation table to a temporary file."""
    path = tmp_path / "gender.csv"
    path.write_text(gender_csv_text, encoding="utf-8")
    return path


@pytest.fixture
def gender_table(gender_csv_text):
    """Build a translation table from the gender CSV text."""
    translations = [
        Translation(*line.split(",", 1)) for line in gender_csv_text.splitlines()
    ]
    return TranslationTable(translations, label="file:///data/gender.csv")


@pytest.fixture
def people_df():
    """Create a people DataFrame with database-side gender codes."""
    data = {
        "person_id": [1, 2, 3, 4],
        "name": ["Ada", "Alan", "Grace", "Kim"],
        "gender": ["F", "M", "F", "Q"],
    }
    df = pd.DataFrame(data)
    df.attrs["dataset_name"] = "people"
    return df


@pytest.fixture
def skipped_row():
    return Skipped(3, 3, "file:///data/gender.csv")
