#!/usr/bin/env python3
"""Tests for log timestamp parsing."""

from datetime import datetime

import pytest

from eqlog_tools.log import TimestampParts, parse_timestamp


def test_full_timestamp():
    parts = parse_timestamp("[Mon Oct 13 00:42:36 2003] ")

    assert parts == TimestampParts('Mon', 'Oct', '13', '00', '42', '36', '2003')
    assert parts.is_complete


def test_to_datetime():
    parts = parse_timestamp("[Mon Oct 13 00:42:36 2003] ")
    assert parts.to_datetime() == datetime(2003, 10, 13, 0, 42, 36)


def test_short_timestamp_leaves_missing_parts_none():
    parts = parse_timestamp("[Mon Oct")

    assert parts.day == 'Mon'
    assert parts.month == 'Oct'
    assert parts.date is None
    assert parts.year is None
    assert not parts.is_complete


def test_empty_timestamp():
    assert parse_timestamp("") == TimestampParts()
    assert parse_timestamp(None) == TimestampParts()


def test_incomplete_timestamp_has_no_datetime():
    with pytest.raises(ValueError):
        parse_timestamp("[Mon Oct 13").to_datetime()


def test_stamp_from_classified_record():
    from eqlog_tools.log import classify

    record = classify("[Tue Oct 14 21:05:09 2003] You forget Ensnaring Roots.\n")
    parts = parse_timestamp(record['time_stamp'])

    assert (parts.hour, parts.minute, parts.second) == ('21', '05', '09')
