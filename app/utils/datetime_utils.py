# app/utils/datetime_utils.py
"""
댓글 서비스 전체에서 사용하는 시간/날짜 처리 유틸리티 모듈

- 모든 timestamp는 UTC timezone-aware datetime으로 통일합니다.
- Firestore 저장/조회 시의 변환 규칙을 한 곳에서 관리합니다.
- API 응답용 ISO 문자열 생성과 요청 값 파싱을 담당합니다.
"""

import logging
from datetime import datetime, date, time, timezone
from typing import Any
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """시간/날짜 처리를 위한 정적 메서드 모음"""

    @staticmethod
    def now() -> datetime:
        """현재 시간을 UTC timezone-aware datetime으로 반환"""
        return datetime.now(timezone.utc)

    @staticmethod
    def ensure_utc(dt: datetime) -> datetime:
        """naive datetime은 UTC로 간주하고, aware datetime은 UTC로 변환합니다."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        ISO 포맷 문자열을 UTC datetime으로 파싱

        지원 포맷:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00
        """
        if not iso_string:
            raise ValueError("빈 문자열은 파싱할 수 없습니다")
        try:
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'
            dt = dateutil_parser.isoparse(iso_string)
        except (ValueError, OverflowError) as e:
            logger.error(f"ISO datetime 파싱 실패: {iso_string} - {e}")
            raise ValueError(f"잘못된 ISO 날짜 형식입니다: {iso_string}") from e
        return DateTimeUtils.ensure_utc(dt)

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime을 'Z' 접미사가 붙은 ISO 문자열로 변환"""
        return DateTimeUtils.ensure_utc(dt).isoformat().replace('+00:00', 'Z')

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Firestore 저장을 위해 날짜/시간 값을 변환합니다.

        - date -> 해당 날짜 00:00:00 UTC datetime
        - naive datetime -> UTC aware datetime
        - dict/list는 내부까지 재귀적으로 변환
        """
        if isinstance(obj, datetime):
            return DateTimeUtils.ensure_utc(obj)
        if isinstance(obj, date):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Firestore에서 읽은 값을 Python 객체로 변환합니다.

        - DatetimeWithNanoseconds 등 timestamp 객체 -> UTC datetime
        - dict/list는 내부까지 재귀적으로 변환
        """
        if isinstance(obj, datetime):
            return DateTimeUtils.ensure_utc(obj)
        if hasattr(obj, 'timestamp') and callable(obj.timestamp):
            return datetime.fromtimestamp(obj.timestamp(), tz=timezone.utc)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]
        return obj
