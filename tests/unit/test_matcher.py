"""
Unit tests for the match predicate.

The predicate works on synthetic records, no filesystem access needed.
"""

from datetime import datetime

from filesearch.models.search_query import SearchCriteria
from filesearch.models.search_results import FileRecord
from filesearch.tools.matcher import filter_records, matches_criteria


def make_record(name: str, modified: datetime) -> FileRecord:
    return FileRecord(name=name, path=f"/data/{name}", size=100, modified_time=modified)


JAN_15_2024 = datetime(2024, 1, 15, 8, 30, 0)


class TestExtensionFilter:
    """Test cases for the extension part of the predicate."""

    def test_no_filter_accepts_everything(self):
        criteria = SearchCriteria()
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is True
        assert matches_criteria(make_record("Makefile", JAN_15_2024), criteria) is True

    def test_member_accepted(self):
        criteria = SearchCriteria(extensions="go,py")
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is True
        assert matches_criteria(make_record("b.py", JAN_15_2024), criteria) is True

    def test_case_insensitive(self):
        criteria = SearchCriteria(extensions="GO")
        assert matches_criteria(make_record("MAIN.Go", JAN_15_2024), criteria) is True

    def test_non_member_rejected_regardless_of_dates(self):
        """An extension mismatch rejects even when every date filter matches."""
        record = make_record("b.py", JAN_15_2024)

        assert matches_criteria(record, SearchCriteria(extensions="go")) is False
        assert matches_criteria(record, SearchCriteria(extensions="go", exact_date="15/1/2024")) is False
        assert matches_criteria(record, SearchCriteria(extensions="go", year=2024, month=1, day=15)) is False

    def test_file_without_extension_rejected(self):
        criteria = SearchCriteria(extensions="go")
        assert matches_criteria(make_record("Makefile", JAN_15_2024), criteria) is False


class TestExactDate:
    """Test cases for the exact date filter."""

    def test_exact_match_accepted(self):
        criteria = SearchCriteria(exact_date="15/1/2024")
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is True

    def test_single_component_mismatch_rejected(self):
        """Differing in day, month or year alone rejects."""
        record = make_record("a.go", JAN_15_2024)

        for date in ("16/1/2024", "15/2/2024", "15/1/2023"):
            assert matches_criteria(record, SearchCriteria(exact_date=date)) is False

    def test_exact_date_overrides_partial_fields(self):
        """A matching exact date accepts whatever the partial fields say."""
        criteria = SearchCriteria(exact_date="15/1/2024", year=1999, month=7, day=3)
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is True

    def test_leading_zeros(self):
        criteria = SearchCriteria(exact_date="05/01/2024")
        record = make_record("a.go", datetime(2024, 1, 5))
        assert matches_criteria(record, criteria) is True

    def test_malformed_exact_date_falls_back_to_partial_fields(self):
        """A date that does not split into three parts is ignored."""
        record = make_record("a.go", JAN_15_2024)

        assert matches_criteria(record, SearchCriteria(exact_date="15/1")) is True
        assert matches_criteria(record, SearchCriteria(exact_date="15/1", year=2023)) is False
        assert matches_criteria(record, SearchCriteria(exact_date="15/x/2024", year=2024)) is True

    def test_out_of_range_never_matches(self):
        criteria = SearchCriteria(exact_date="32/1/2024")
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is False


class TestPartialDate:
    """Test cases for independent day / month / year filters."""

    def test_no_date_filter_never_rejects(self):
        criteria = SearchCriteria()
        for modified in (datetime(1990, 2, 3), JAN_15_2024, datetime(2030, 12, 31)):
            assert matches_criteria(make_record("a.go", modified), criteria) is True

    def test_single_fields(self):
        record = make_record("a.go", JAN_15_2024)

        assert matches_criteria(record, SearchCriteria(year=2024)) is True
        assert matches_criteria(record, SearchCriteria(year=2023)) is False
        assert matches_criteria(record, SearchCriteria(month=1)) is True
        assert matches_criteria(record, SearchCriteria(month=2)) is False
        assert matches_criteria(record, SearchCriteria(day=15)) is True
        assert matches_criteria(record, SearchCriteria(day=14)) is False

    def test_fields_compose_with_and(self):
        """Matching year but not month, with both set, rejects."""
        record = make_record("a.go", JAN_15_2024)

        assert matches_criteria(record, SearchCriteria(year=2024, month=2)) is False
        assert matches_criteria(record, SearchCriteria(year=2024, month=1)) is True
        assert matches_criteria(record, SearchCriteria(year=2024, month=1, day=16)) is False

    def test_month_13_never_matches(self):
        criteria = SearchCriteria(month=13)
        assert matches_criteria(make_record("a.go", JAN_15_2024), criteria) is False


class TestFilterRecords:
    """Test cases for filter_records."""

    def test_preserves_order(self):
        records = [
            make_record("z.go", JAN_15_2024),
            make_record("b.py", JAN_15_2024),
            make_record("a.go", JAN_15_2024),
        ]

        filtered = list(filter_records(records, SearchCriteria(extensions="go")))

        assert [r.name for r in filtered] == ["z.go", "a.go"]

    def test_lazy(self):
        records = iter([make_record("a.go", JAN_15_2024)])
        result = filter_records(records, SearchCriteria())
        assert next(result).name == "a.go"
