# app/utils/__init__.py
"""
유틸리티 모듈 패키지

댓글 서비스 전반에서 공통으로 사용하는 시간 처리 유틸리티를 제공합니다.
"""

from .datetime_utils import DateTimeUtils

__all__ = ['DateTimeUtils']
