from crowbot.dates import PartialDate, compute_age, find_dates, is_before, parse_date


def test_parse_month_day_year():
    d = parse_date("January 26, 1955")
    assert (d.year, d.month, d.day) == (1955, 1, 26)
    assert str(d) == "January 26, 1955"


def test_parse_without_comma_and_abbreviated():
    assert parse_date("Oct 6 2020") == PartialDate(2020, 10, 6)
    assert parse_date("sept. 3, 1970") == PartialDate(1970, 9, 3)


def test_parse_day_month_year_and_iso():
    assert parse_date("12 May 2001") == PartialDate(2001, 5, 12)
    assert parse_date("1955-01-26") == PartialDate(1955, 1, 26)


def test_parse_coarse_granularity():
    assert parse_date("March 1970") == PartialDate(1970, 3)
    assert parse_date(" 1970 ") == PartialDate(1970)


def test_parse_rejects_garbage_and_impossible_days():
    assert parse_date("") is None
    assert parse_date("sometime") is None
    assert parse_date("February 30, 2001") is None
    assert parse_date("2001-13-01") is None


def test_find_dates_in_order():
    found = find_dates("born 26 January 1955 in Amsterdam – died October 6, 2020")
    assert [f.text for f in found] == ["26 January 1955", "October 6, 2020"]


def test_find_dates_ignores_years_inside_tokens():
    assert find_dates("catalog BWV1055 or K.1955") == []
    assert [f.text for f in find_dates("1900–1980")] == ["1900", "1980"]


def test_compute_age_adjusts_for_birthday():
    birth = PartialDate(1946, 1, 20)
    assert compute_age(birth, PartialDate(2025, 1, 16)) == 78
    assert compute_age(birth, PartialDate(2025, 1, 20)) == 79
    assert compute_age(birth, PartialDate(2025, 3)) == 79
    assert compute_age(PartialDate(1900), PartialDate(1980, 2, 1)) == 80


def test_compute_age_negative_is_none():
    assert compute_age(PartialDate(2000), PartialDate(1990)) is None


def test_age_monotonic_in_death_day():
    birth = PartialDate(1955, 1, 26)
    ages = [compute_age(birth, PartialDate(2020, 1, day)) for day in range(1, 32)]
    assert ages == sorted(ages)


def test_is_before_requires_complete_dates():
    assert is_before(PartialDate(1990, 1, 1), PartialDate(2000, 1, 1)) is True
    assert is_before(PartialDate(1990), PartialDate(2000, 1, 1)) is False
