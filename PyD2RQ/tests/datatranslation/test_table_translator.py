"""Tests for TableLookup, TableTranslator and BaseValueTranslator."""

import pandas as pd
import pytest

from PyD2RQ.datatranslation import (
    BaseValueTranslator,
    TableLookup,
    TableTranslator,
    Translation,
    TranslationTable,
)


class IdentityTranslator(BaseValueTranslator):
    """Concrete implementation for testing the abstract base class."""

    def translate(self, df: pd.DataFrame, column: str) -> pd.DataFrame:
        return df.copy()


class TestBaseValueTranslator:
    """Test the BaseValueTranslator abstract base class."""

    def test_abstract_class_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            BaseValueTranslator()

    def test_abstract_method_must_be_implemented(self):
        class IncompleteTranslator(BaseValueTranslator):
            pass

        with pytest.raises(TypeError):
            IncompleteTranslator()

    def test_concrete_implementation(self, people_df):
        translator = IdentityTranslator()
        result = translator.translate(people_df, "gender")

        assert isinstance(translator, BaseValueTranslator)
        assert result is not people_df
        pd.testing.assert_frame_equal(result, people_df)

    def test_table_translator_inherits(self, gender_table):
        assert isinstance(TableTranslator(gender_table), BaseValueTranslator)


class TestTableLookup:
    """Test the two-way value lookup."""

    def test_both_directions(self, gender_table):
        lookup = gender_table.translator()

        assert isinstance(lookup, TableLookup)
        assert lookup.to_rdf("M") == "http://example.org/gender/male"
        assert lookup.to_database("http://example.org/gender/female") == "F"

    def test_unmapped_and_none(self, gender_table):
        lookup = gender_table.translator()

        assert lookup.to_rdf("Q") is None
        assert lookup.to_rdf(None) is None
        assert lookup.to_database(None) is None

    def test_lookup_is_exact(self, gender_table):
        lookup = gender_table.translator()

        assert lookup.to_rdf("m") is None
        assert lookup.to_rdf(" M") is None

    def test_later_duplicate_wins(self):
        lookup = TableLookup([Translation("a", "first"), Translation("a", "second")])

        assert lookup.to_rdf("a") == "second"
        assert lookup.to_database("first") == "a"
        assert len(lookup) == 1


class TestTableTranslator:
    """Test translating DataFrame columns through a table."""

    def test_initialization_default_direction(self, gender_table):
        translator = TableTranslator(gender_table)
        assert translator.direction == "to_rdf"
        assert translator.table is gender_table

    def test_initialization_invalid_direction(self, gender_table):
        with pytest.raises(ValueError, match="Unsupported translation direction"):
            TableTranslator(gender_table, direction="sideways")

    def test_translate_to_rdf(self, gender_table, people_df):
        result = TableTranslator(gender_table).translate(people_df, "gender")

        assert result["gender"].iloc[:3].tolist() == [
            "http://example.org/gender/female",
            "http://example.org/gender/male",
            "http://example.org/gender/female",
        ]
        assert pd.isna(result["gender"].iloc[3])
        assert result["name"].tolist() == people_df["name"].tolist()

    def test_input_unchanged(self, gender_table, people_df):
        original = people_df.copy()
        TableTranslator(gender_table).translate(people_df, "gender")
        pd.testing.assert_frame_equal(people_df, original)

    def test_translate_to_database(self, gender_table):
        df = pd.DataFrame({"gender": ["http://example.org/gender/other", "http://example.org/gender/male"]})
        result = TableTranslator(gender_table, direction="to_database").translate(df, "gender")
        assert result["gender"].tolist() == ["X", "M"]

    def test_non_string_values_compared_as_strings(self):
        table = TranslationTable([Translation("1", "http://example.org/status/active")])
        df = pd.DataFrame({"status": [1, 2]})

        result = TableTranslator(table).translate(df, "status")

        assert result["status"].iloc[0] == "http://example.org/status/active"
        assert pd.isna(result["status"].iloc[1])

    def test_missing_values_stay_missing(self, gender_table):
        df = pd.DataFrame({"gender": ["M", None]})
        result = TableTranslator(gender_table).translate(df, "gender")

        assert result["gender"].iloc[0] == "http://example.org/gender/male"
        assert pd.isna(result["gender"].iloc[1])
        assert result.attrs["provenance"][-1]["params"]["unmapped"] == 0

    def test_missing_column(self, gender_table, people_df):
        with pytest.raises(ValueError, match="Column 'sex' not found"):
            TableTranslator(gender_table).translate(people_df, "sex")

    def test_provenance_entry(self, gender_table, people_df):
        result = TableTranslator(gender_table).translate(people_df, "gender")

        assert result.attrs["dataset_name"] == "people"
        entry = result.attrs["provenance"][-1]
        assert entry["op"] == "value_translate"
        assert entry["params"]["column"] == "gender"
        assert entry["params"]["direction"] == "to_rdf"
        assert entry["params"]["table"] == "file:///data/gender.csv"
        assert entry["params"]["translated"] == 3
        assert entry["params"]["unmapped"] == 1
        assert entry["params"]["translator"] == "TableTranslator"
        assert "ts" in entry

    def test_existing_provenance_extended(self, gender_table, people_df):
        people_df.attrs["provenance"] = {"dataset_name": "people", "reader": "read_sql_query"}

        result = TableTranslator(gender_table).translate(people_df, "gender")

        assert len(result.attrs["provenance"]) == 2
        assert result.attrs["provenance"][0]["reader"] == "read_sql_query"
        assert isinstance(people_df.attrs["provenance"], dict)

    def test_unmapped_values_logged(self, gender_table, people_df, caplog):
        with caplog.at_level("WARNING", logger="PyD2RQ.datatranslation.table_translator"):
            TableTranslator(gender_table).translate(people_df, "gender")

        assert "1 values in column 'gender'" in caplog.text
