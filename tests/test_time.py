from datetime import datetime, timezone

import pytest

from people_directory.domain.time import InvalidDate, parse_birth_date, to_epoch_millis


def _millis(year: int, month: int, day: int) -> int:
    return int(datetime(year, month, day, tzinfo=timezone.utc).timestamp() * 1000)


def test_parses_day_first():
    assert parse_birth_date("05/06/1985") == _millis(1985, 6, 5)
    assert parse_birth_date("05/06/1985") != _millis(1985, 5, 6)


def test_known_timestamp_for_june_fifth():
    assert parse_birth_date("05/06/1985") == 486777600000


def test_accepts_single_digit_components_and_surrounding_spaces():
    assert parse_birth_date(" 5/6/1985 ") == _millis(1985, 6, 5)


@pytest.mark.parametrize(
    "text",
    ["1985/06/05", "31/13/1985", "30/02/2020", "05/06", "05-06-1985", "aa/bb/cccc", "", "05/06/85"],
)
def test_rejects_malformed_dates(text):
    with pytest.raises(InvalidDate):
        parse_birth_date(text)


def test_invalid_date_is_a_value_error():
    with pytest.raises(ValueError):
        parse_birth_date("31/04/2001")


def test_naive_datetime_is_treated_as_utc():
    naive = datetime(2000, 1, 1)
    aware = datetime(2000, 1, 1, tzinfo=timezone.utc)
    assert to_epoch_millis(naive) == to_epoch_millis(aware) == 946684800000
