import pytest

from docinbox.domain.dates import parse_inferred_date


def test_parse_inferred_date_strips_whitespace() -> None:
    assert parse_inferred_date(" 2024-03-01\n") == "2024-03-01"


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "NONE", "none", "2024-02-30", "2024-3-1", "March 1, 2024", "2024-03-01T00:00"],
)
def test_parse_inferred_date_rejects_non_dates(raw) -> None:
    assert parse_inferred_date(raw) is None
