"""Tests for time utilities."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from wpdocs.utils.time import as_utc, parse_publication_date, short_date_format, site_timezone

ROME = ZoneInfo("Europe/Rome")


def test_site_timezone_defaults_to_rome():
    assert str(site_timezone()) == "Europe/Rome"
    assert str(site_timezone("UTC")) == "UTC"


def test_short_date_format_uses_local_day():
    """Test that the day is taken in the site timezone, not in UTC."""
    # 2012-03-14 23:30 UTC is already the 15th in Rome
    timestamp = int(datetime(2012, 3, 14, 23, 30, tzinfo=timezone.utc).timestamp())

    assert short_date_format(timestamp, ROME) == "20120315"
    assert short_date_format(timestamp, timezone.utc) == "20120314"


def test_parse_publication_date_sets_fixed_time():
    result = parse_publication_date("20120315", ROME)
    assert result == datetime(2012, 3, 15, 9, 30, tzinfo=ROME)
    assert result.utcoffset() == timedelta(hours=1)


def test_parse_publication_date_rejects_non_dates():
    assert parse_publication_date(None, ROME) is None
    assert parse_publication_date("", ROME) is None
    assert parse_publication_date("2012031", ROME) is None
    assert parse_publication_date("2012-03-15", ROME) is None
    assert parse_publication_date("20121345", ROME) is None


def test_as_utc_attaches_or_converts():
    naive = datetime(2012, 3, 10, 10, 0)
    assert as_utc(naive) == datetime(2012, 3, 10, 10, 0, tzinfo=timezone.utc)
    assert as_utc(naive).tzinfo is timezone.utc

    local = datetime(2012, 3, 10, 11, 0, tzinfo=ROME)
    assert as_utc(local) == datetime(2012, 3, 10, 10, 0, tzinfo=timezone.utc)
    assert as_utc(None) is None
