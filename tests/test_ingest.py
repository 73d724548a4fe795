"""Tests for loading name lists."""
import pytest

from gender_analyzer.ingest import (
    SAMPLE_NAMES,
    detect_name_column,
    find_column,
    load_names,
    load_names_from_csv,
    parse_name_list,
)


class TestParseNameList:
    """Tests for parse_name_list function."""

    def test_splits_and_strips(self):
        assert parse_name_list("  Anna Bauer\n\nMichael Chen  \n") == ["Anna Bauer", "Michael Chen"]

    def test_windows_line_endings(self):
        assert parse_name_list("Anna Bauer\r\nLisa White\r\n") == ["Anna Bauer", "Lisa White"]

    def test_blank_text(self):
        assert parse_name_list("") == []
        assert parse_name_list("   \n\t\n") == []
        assert parse_name_list(None) == []


class TestDetectNameColumn:
    """Tests for detect_name_column function."""

    def test_priority_order(self):
        assert detect_name_column(["Company", "Name", "CEO Name"]) == "CEO Name"

    def test_fallback_to_name(self):
        assert detect_name_column(["Company", "name"]) == "name"

    def test_ignores_header_whitespace(self):
        assert detect_name_column(["Company", " Full Name "]) == " Full Name "

    def test_no_match(self):
        assert detect_name_column(["Company", "Revenue"]) is None


class TestFindColumn:
    """Tests for find_column function."""

    def test_exact_match(self):
        assert find_column(["Company", "Chair"], "Chair") == "Chair"

    def test_ignores_whitespace(self):
        assert find_column(["Company", " Chair "], "Chair") == " Chair "

    def test_missing(self):
        assert find_column(["Company"], "Chair") is None


class TestLoadNamesFromCsv:
    """Tests for load_names_from_csv function."""

    def test_detects_ceo_column(self, tmp_path):
        path = tmp_path / "ceos.csv"
        path.write_text(
            "Company,CEO Name,Revenue\n"
            "Acme,Dr. Alexander Bethke-Jaenicke,100\n"
            "Globex,Prof. Maria Rodriguez,200\n",
            encoding="utf-8",
        )

        assert load_names_from_csv(path) == ["Dr. Alexander Bethke-Jaenicke", "Prof. Maria Rodriguez"]

    def test_quoted_commas(self, tmp_path):
        path = tmp_path / "quoted.csv"
        path.write_text(
            'Name,Company\n"Smith, John","Acme, Inc."\nAnna Bauer,Globex\n',
            encoding="utf-8",
        )

        assert load_names_from_csv(path) == ["Smith, John", "Anna Bauer"]

    def test_skips_blank_cells(self, tmp_path):
        path = tmp_path / "gaps.csv"
        path.write_text("name,company\nAnna Bauer,Acme\n,Globex\n  Lisa White  ,Initech\n", encoding="utf-8")

        assert load_names_from_csv(path) == ["Anna Bauer", "Lisa White"]

    def test_literal_na_is_a_name(self, tmp_path):
        path = tmp_path / "na.csv"
        path.write_text("name\nNA\nAnna Bauer\n", encoding="utf-8")

        assert load_names_from_csv(path) == ["NA", "Anna Bauer"]

    def test_explicit_column(self, tmp_path):
        path = tmp_path / "people.csv"
        path.write_text("Name,Chair\nAnna Bauer,Lisa White\n", encoding="utf-8")

        assert load_names_from_csv(path, column="Chair") == ["Lisa White"]

    def test_explicit_column_missing(self, tmp_path):
        path = tmp_path / "people.csv"
        path.write_text("Name,Chair\nAnna Bauer,Lisa White\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Column 'Board' not found. Available columns: Name, Chair"):
            load_names_from_csv(path, column="Board")

    def test_no_name_column(self, tmp_path):
        path = tmp_path / "companies.csv"
        path.write_text("Company,Revenue\nAcme,100\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Could not find a name column. Available columns: Company, Revenue"):
            load_names_from_csv(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="appears to be empty"):
            load_names_from_csv(path)

    def test_header_only(self, tmp_path):
        path = tmp_path / "header.csv"
        path.write_text("Name,Company\n", encoding="utf-8")

        with pytest.raises(ValueError, match="appears to be empty"):
            load_names_from_csv(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            load_names_from_csv(tmp_path / "missing.csv")


class TestLoadNames:
    """Tests for load_names dispatch."""

    def test_text_file(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_text("Anna Bauer\n\n  Michael Chen\n", encoding="utf-8")

        assert load_names(path) == ["Anna Bauer", "Michael Chen"]

    def test_file_without_extension(self, tmp_path):
        path = tmp_path / "names"
        path.write_text("Anna Bauer\n", encoding="utf-8")

        assert load_names(path) == ["Anna Bauer"]

    def test_csv_dispatch(self, tmp_path):
        path = tmp_path / "names.CSV"
        path.write_text("Full Name\nAnna Bauer\n", encoding="utf-8")

        assert load_names(path) == ["Anna Bauer"]

    @pytest.mark.parametrize("filename", ["ceos.xlsx", "ceos.xls"])
    def test_excel_rejected(self, tmp_path, filename):
        with pytest.raises(ValueError, match="Excel files are not supported. Please convert to CSV."):
            load_names(tmp_path / filename)

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported file format: .json"):
            load_names(tmp_path / "names.json")

    def test_missing_text_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Name list not found"):
            load_names(tmp_path / "missing.txt")


class TestSampleNames:
    """Tests for the bundled sample list."""

    def test_sample_list(self):
        assert len(SAMPLE_NAMES) == 20
        assert SAMPLE_NAMES[0] == "Dr. Alexander Bethke-Jaenicke"
        assert all(name == name.strip() and name for name in SAMPLE_NAMES)
