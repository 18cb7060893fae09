"""Unit tests for the UTCDateTime column type."""

from datetime import datetime, timedelta, timezone

from sqlalchemy.dialects import postgresql, sqlite

from capable.adapters.db.sa_types import UTCDateTime

PLUS_TWO = timezone(timedelta(hours=2))


def test_bind_converts_to_utc_for_postgres():
    """Aware values are normalised to UTC."""
    value = datetime(2024, 1, 1, 12, 0, tzinfo=PLUS_TWO)
    bound = UTCDateTime().process_bind_param(value, postgresql.dialect())
    assert bound == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert bound.tzinfo == timezone.utc


def test_bind_stores_naive_utc_on_sqlite():
    """SQLite gets naive UTC."""
    value = datetime(2024, 1, 1, 12, 0, tzinfo=PLUS_TWO)
    bound = UTCDateTime().process_bind_param(value, sqlite.dialect())
    assert bound == datetime(2024, 1, 1, 10, 0)
    assert bound.tzinfo is None


def test_bind_treats_naive_as_utc():
    """Naive input is taken to be UTC already."""
    bound = UTCDateTime().process_bind_param(datetime(2024, 1, 1), postgresql.dialect())
    assert bound == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_result_is_always_aware_utc():
    """Naive results are labelled UTC; aware ones converted."""
    t = UTCDateTime()
    assert t.process_result_value(datetime(2024, 1, 1), sqlite.dialect()) == datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )
    converted = t.process_result_value(
        datetime(2024, 1, 1, 2, tzinfo=PLUS_TWO), postgresql.dialect()
    )
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 0


def test_none_passes_through():
    """NULL stays NULL in both directions."""
    t = UTCDateTime()
    assert t.process_bind_param(None, sqlite.dialect()) is None
    assert t.process_result_value(None, sqlite.dialect()) is None
