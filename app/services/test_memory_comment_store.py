# app/services/test_memory_comment_store.py
"""
InMemoryCommentStore 테스트

사용법: python -m pytest app/services/test_memory_comment_store.py -v
"""

import threading
from datetime import datetime, timezone

from app.models.comment import Comment
from app.services.memory_comment_store import InMemoryCommentStore


def _comment(comment_id, content='text', post='post-1', user='user-1', second=0):
    return Comment(
        comment_id=comment_id, content=content, post=post, user=user,
        created_at=datetime(2024, 1, 1, 0, 0, second, tzinfo=timezone.utc),
    )


def test_returned_comments_are_copies():
    store = InMemoryCommentStore()
    store.insert(_comment('c1'))

    fetched = store.get('c1')
    fetched.likes.append('user-9')
    fetched.content = 'mutated'

    assert store.get('c1').likes == []
    assert store.get('c1').content == 'text'


def test_ordering_uses_created_at_then_insertion_order():
    store = InMemoryCommentStore()
    store.insert(_comment('late', second=30))
    store.insert(_comment('early', second=10))
    store.insert(_comment('tie-a', second=20))
    store.insert(_comment('tie-b', second=20))

    assert [c.comment_id for c in store.find_all()] == ['late', 'tie-b', 'tie-a', 'early']
    assert [c.comment_id for c in store.find_all(skip=1, limit=2)] == ['tie-b', 'tie-a']


def test_add_and_remove_like_report_changes():
    store = InMemoryCommentStore()
    store.insert(_comment('c1'))

    assert store.add_like('missing', 'user-2') == (None, False)

    comment, changed = store.add_like('c1', 'user-2')
    assert changed and comment.likes == ['user-2']

    comment, changed = store.add_like('c1', 'user-2')
    assert not changed and comment.likes == ['user-2']

    comment, changed = store.remove_like('c1', 'user-2')
    assert changed and comment.likes == []

    comment, changed = store.remove_like('c1', 'user-2')
    assert not changed and comment.likes == []


def test_concurrent_likes_by_same_user_leave_one_entry():
    store = InMemoryCommentStore()
    store.insert(_comment('c1'))
    results = []
    start = threading.Barrier(20)

    def like():
        start.wait()
        results.append(store.add_like('c1', 'user-2')[1])

    threads = [threading.Thread(target=like) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert store.get('c1').likes == ['user-2']


def test_delete_and_lookups():
    store = InMemoryCommentStore(users={'user-1': 'alice'}, posts={'post-1': 'First walk'})
    store.insert(_comment('c1'))

    assert store.get_usernames(['user-1', 'user-x']) == {'user-1': 'alice'}
    assert store.get_post_titles(['post-1', 'post-x']) == {'post-1': 'First walk'}

    assert store.delete('c1') is True
    assert store.delete('c1') is False
    assert store.count() == 0
    assert store.update_content('c1', 'new') is None


def test_comment_without_timestamp_sorts_last():
    store = InMemoryCommentStore()
    legacy = _comment('legacy')
    legacy.created_at = None
    store.insert(legacy)
    store.insert(_comment('c1', second=5))

    assert [c.comment_id for c in store.find_all()] == ['c1', 'legacy']
