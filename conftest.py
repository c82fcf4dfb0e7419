# conftest.py
"""
공용 pytest fixture

- Firestore 대신 InMemoryCommentStore를 주입한 테스트용 앱을 생성합니다.
- auth_headers(user_id)로 해당 사용자의 Bearer 토큰 헤더를 만듭니다.
"""

from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from app.services.memory_comment_store import InMemoryCommentStore


@pytest.fixture
def comment_store():
    return InMemoryCommentStore(
        users={'user-1': 'alice', 'user-2': 'bob'},
        posts={'post-1': 'First walk', 'post-2': 'Second walk'},
    )


@pytest.fixture
def app(comment_store):
    return create_app('testing', comment_store=comment_store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _headers(user_id='user-1'):
        with app.app_context():
            token = create_access_token(identity=user_id)
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def fake_clock():
    """호출될 때마다 1초씩 증가하는 시계. 생성 순서와 created_at 순서를 일치시킵니다."""
    state = {'current': datetime(2024, 1, 1, tzinfo=timezone.utc)}

    def _clock():
        state['current'] += timedelta(seconds=1)
        return state['current']
    return _clock
