# app/models/test_comment_model.py

from datetime import datetime, timezone

from app.models.comment import Comment


def test_from_dict_accepts_iso_string_timestamp():
    comment = Comment.from_dict({
        'comment_id': 'c1', 'content': 'hi', 'post': 'post-1', 'user': 'user-1',
        'likes': None, 'created_at': '2024-01-15T10:30:00+09:00',
    })

    assert comment.created_at == datetime(2024, 1, 15, 1, 30, tzinfo=timezone.utc)
    assert comment.likes == []


def test_to_dict_copies_likes():
    comment = Comment(comment_id='c1', content='hi', post='post-1', user='user-1', likes=['user-2'])

    data = comment.to_dict()
    data['likes'].append('user-3')

    assert comment.likes == ['user-2']
    assert data['comment_id'] == 'c1'


def test_from_dict_keeps_missing_timestamp_as_none():
    comment = Comment.from_dict({
        'comment_id': 'legacy', 'content': 'hi', 'post': 'post-1', 'user': 'user-1',
    })

    assert comment.created_at is None
