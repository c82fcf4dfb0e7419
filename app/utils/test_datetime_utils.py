# app/utils/test_datetime_utils.py
"""
시간 처리 유틸리티 테스트

사용법: python -m pytest app/utils/test_datetime_utils.py -v
"""

import pytest
from datetime import datetime, date, timezone, timedelta
from app.utils.datetime_utils import DateTimeUtils


def test_now_is_utc_aware():
    assert DateTimeUtils.now().tzinfo == timezone.utc


def test_parse_iso_datetime():
    """다양한 ISO 포맷이 UTC로 정규화되어야 함"""
    test_cases = [
        "2024-01-15T10:30:00Z",
        "2024-01-15T10:30:00+09:00",
        "2024-01-15T10:30:00.123456Z",
        "2024-01-15T10:30:00"
    ]

    for iso_string in test_cases:
        dt = DateTimeUtils.parse_iso_datetime(iso_string)
        assert dt.tzinfo == timezone.utc

    kst = DateTimeUtils.parse_iso_datetime("2024-01-15T10:30:00+09:00")
    assert kst.hour == 1


def test_to_iso_string_uses_z_suffix():
    dt = datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=9)))
    assert DateTimeUtils.to_iso_string(dt) == "2024-01-15T01:30:00Z"
    assert DateTimeUtils.to_iso_string(datetime(2024, 1, 15)) == "2024-01-15T00:00:00Z"


def test_for_firestore():
    """중첩된 dict/list 내부의 날짜도 변환되어야 함"""
    test_data = {
        'created_at': datetime(2024, 1, 15, 10, 30),
        'nested': {'day': date(2023, 12, 25)},
        'likes': ['user-1', 'user-2'],
    }

    converted = DateTimeUtils.for_firestore(test_data)

    assert converted['created_at'].tzinfo == timezone.utc
    assert isinstance(converted['nested']['day'], datetime)
    assert converted['likes'] == ['user-1', 'user-2']


def test_from_firestore_converts_timestamp_like_objects():
    class FakeTimestamp:
        def timestamp(self):
            return 0.0

    converted = DateTimeUtils.from_firestore({'created_at': FakeTimestamp(), 'content': 'hi'})
    assert converted['created_at'] == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert converted['content'] == 'hi'


def test_error_handling():
    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("invalid-date")

    with pytest.raises(ValueError):
        DateTimeUtils.parse_iso_datetime("")
