# app/services/memory_comment_store.py

import copy
import itertools
import threading
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.comment import Comment
from app.services.comment_store import CommentStore


class InMemoryCommentStore(CommentStore):
    """
    프로세스 내부 dict 기반 댓글 저장소.
    테스트와 로컬 개발(COMMENT_STORE=memory)에서 Firestore 대신 사용합니다.
    모든 연산은 하나의 락 안에서 수행되며, 반환값은 내부 상태와 분리된 복사본입니다.
    """
    def __init__(self, users: Optional[Dict[str, str]] = None, posts: Optional[Dict[str, str]] = None):
        self._lock = threading.RLock()
        self._comments: Dict[str, Comment] = {}
        self._order: Dict[str, int] = {}
        self._sequence = itertools.count()
        self.users: Dict[str, str] = dict(users or {})  # user_id -> username
        self.posts: Dict[str, str] = dict(posts or {})  # post_id -> title

    def _sorted(self, comments: Iterable[Comment]) -> List[Comment]:
        # 같은 created_at이면 나중에 저장된 댓글이 앞에 오고, created_at이 없는 댓글은 맨 뒤로 갑니다.
        ordered = sorted(
            comments,
            key=lambda c: (
                c.created_at is not None,
                c.created_at.timestamp() if c.created_at else 0.0,
                self._order[c.comment_id],
            ),
            reverse=True,
        )
        return [copy.deepcopy(c) for c in ordered]

    def insert(self, comment: Comment) -> Comment:
        with self._lock:
            self._comments[comment.comment_id] = copy.deepcopy(comment)
            self._order[comment.comment_id] = next(self._sequence)
            return copy.deepcopy(comment)

    def get(self, comment_id: str) -> Optional[Comment]:
        with self._lock:
            comment = self._comments.get(comment_id)
            return copy.deepcopy(comment) if comment else None

    def find_by_post(self, post_id: str) -> List[Comment]:
        with self._lock:
            return self._sorted(c for c in self._comments.values() if c.post == post_id)

    def find_by_user(self, user_id: str) -> List[Comment]:
        with self._lock:
            return self._sorted(c for c in self._comments.values() if c.user == user_id)

    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[Comment]:
        with self._lock:
            comments = self._sorted(self._comments.values())
        end = None if limit is None else skip + limit
        return comments[skip:end]

    def count(self) -> int:
        with self._lock:
            return len(self._comments)

    def search_content(self, text: str) -> List[Comment]:
        needle = text.casefold()
        with self._lock:
            return self._sorted(c for c in self._comments.values() if needle in c.content.casefold())

    def update_content(self, comment_id: str, content: str) -> Optional[Comment]:
        with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return None
            comment.content = content
            return copy.deepcopy(comment)

    def delete(self, comment_id: str) -> bool:
        with self._lock:
            self._order.pop(comment_id, None)
            return self._comments.pop(comment_id, None) is not None

    def add_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return None, False
            if user_id in comment.likes:
                return copy.deepcopy(comment), False
            comment.likes.append(user_id)
            return copy.deepcopy(comment), True

    def remove_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        with self._lock:
            comment = self._comments.get(comment_id)
            if comment is None:
                return None, False
            if user_id not in comment.likes:
                return copy.deepcopy(comment), False
            comment.likes.remove(user_id)
            return copy.deepcopy(comment), True

    def get_usernames(self, user_ids: Iterable[str]) -> Dict[str, str]:
        with self._lock:
            return {uid: self.users[uid] for uid in set(user_ids) if uid in self.users}

    def get_post_titles(self, post_ids: Iterable[str]) -> Dict[str, str]:
        with self._lock:
            return {pid: self.posts[pid] for pid in set(post_ids) if pid in self.posts}
