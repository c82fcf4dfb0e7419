# app/services/firestore_comment_store.py

import logging
from functools import wraps
from typing import Dict, Iterable, List, Optional, Tuple

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from app.models.comment import Comment
from app.services.comment_store import CommentStore, StoreError
from app.utils.datetime_utils import DateTimeUtils


def _wrap_store_errors(f):
    """Firestore 클라이언트 예외를 StoreError로 변환합니다."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore 호출 실패 ({f.__name__}): {e}", exc_info=True)
            raise StoreError(f"Firestore {f.__name__} failed") from e
    return decorated_function


class FirestoreCommentStore(CommentStore):
    """
    Cloud Firestore 기반 댓글 저장소.
    - 문서 ID는 comment_id와 동일합니다.
    - 작성자/게시물 정보는 'users', 'posts' 컬렉션에서 일괄 조회합니다.
    """
    def __init__(self, db=None, comments_collection: str = 'comments',
                 users_collection: str = 'users', posts_collection: str = 'posts'):
        self.db = db or firestore.client()
        self.comments_ref = self.db.collection(comments_collection)
        self.users_ref = self.db.collection(users_collection)
        self.posts_ref = self.db.collection(posts_collection)

    def _newest_first(self, query):
        return query.order_by('created_at', direction=firestore.Query.DESCENDING)

    def _to_comments(self, docs) -> List[Comment]:
        return [Comment.from_dict(doc.to_dict()) for doc in docs]

    @_wrap_store_errors
    def insert(self, comment: Comment) -> Comment:
        self.comments_ref.document(comment.comment_id).set(
            DateTimeUtils.for_firestore(comment.to_dict())
        )
        return comment

    @_wrap_store_errors
    def get(self, comment_id: str) -> Optional[Comment]:
        doc = self.comments_ref.document(comment_id).get()
        if not doc.exists:
            return None
        return Comment.from_dict(doc.to_dict())

    @_wrap_store_errors
    def find_by_post(self, post_id: str) -> List[Comment]:
        query = self._newest_first(self.comments_ref.where('post', '==', post_id))
        return self._to_comments(query.stream())

    @_wrap_store_errors
    def find_by_user(self, user_id: str) -> List[Comment]:
        query = self._newest_first(self.comments_ref.where('user', '==', user_id))
        return self._to_comments(query.stream())

    @_wrap_store_errors
    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[Comment]:
        query = self._newest_first(self.comments_ref)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return self._to_comments(query.stream())

    @_wrap_store_errors
    def count(self) -> int:
        results = self.comments_ref.count().get()
        return int(results[0][0].value)

    @_wrap_store_errors
    def search_content(self, text: str) -> List[Comment]:
        # Firestore는 부분 문자열 검색을 지원하지 않으므로 최신순으로 읽으며 직접 거릅니다.
        needle = text.casefold()
        return [
            comment for comment in self._to_comments(self._newest_first(self.comments_ref).stream())
            if needle in comment.content.casefold()
        ]

    @_wrap_store_errors
    def update_content(self, comment_id: str, content: str) -> Optional[Comment]:
        comment_ref = self.comments_ref.document(comment_id)
        try:
            comment_ref.update({'content': content})
        except google_exceptions.NotFound:
            return None
        return Comment.from_dict(comment_ref.get().to_dict())

    @_wrap_store_errors
    def delete(self, comment_id: str) -> bool:
        transaction = self.db.transaction()

        @firestore.transactional
        def _delete_in_transaction(transaction, comment_ref):
            snapshot = comment_ref.get(transaction=transaction)
            if not snapshot.exists:
                return False
            transaction.delete(comment_ref)
            return True

        return _delete_in_transaction(transaction, self.comments_ref.document(comment_id))

    @_wrap_store_errors
    def add_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        transaction = self.db.transaction()

        @firestore.transactional
        def _like_in_transaction(transaction, comment_ref, user_id):
            snapshot = comment_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None, False
            comment = Comment.from_dict(snapshot.to_dict())
            if user_id in comment.likes:
                return comment, False
            transaction.update(comment_ref, {'likes': firestore.ArrayUnion([user_id])})
            comment.likes.append(user_id)
            return comment, True

        return _like_in_transaction(transaction, self.comments_ref.document(comment_id), user_id)

    @_wrap_store_errors
    def remove_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        transaction = self.db.transaction()

        @firestore.transactional
        def _unlike_in_transaction(transaction, comment_ref, user_id):
            snapshot = comment_ref.get(transaction=transaction)
            if not snapshot.exists:
                return None, False
            comment = Comment.from_dict(snapshot.to_dict())
            if user_id not in comment.likes:
                return comment, False
            transaction.update(comment_ref, {'likes': firestore.ArrayRemove([user_id])})
            comment.likes = [uid for uid in comment.likes if uid != user_id]
            return comment, True

        return _unlike_in_transaction(transaction, self.comments_ref.document(comment_id), user_id)

    def _lookup_field(self, collection_ref, ids: Iterable[str], field_name: str) -> Dict[str, str]:
        refs = [collection_ref.document(doc_id) for doc_id in set(ids) if doc_id]
        if not refs:
            return {}
        result = {}
        for doc in self.db.get_all(refs):
            if doc.exists:
                result[doc.id] = (doc.to_dict() or {}).get(field_name)
        return result

    @_wrap_store_errors
    def get_usernames(self, user_ids: Iterable[str]) -> Dict[str, str]:
        return self._lookup_field(self.users_ref, user_ids, 'username')

    @_wrap_store_errors
    def get_post_titles(self, post_ids: Iterable[str]) -> Dict[str, str]:
        return self._lookup_field(self.posts_ref, post_ids, 'title')
