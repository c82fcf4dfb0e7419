# app/api/comments/services.py

import logging
import math
import uuid
from typing import Optional, Dict, Any, List, Callable
from datetime import datetime

from app.models.comment import Comment
from app.services.comment_store import CommentStore
from app.utils.datetime_utils import DateTimeUtils


class CommentError(Exception):
    """댓글 도메인 오류의 기본 클래스. 라우트에서 status_code로 변환됩니다."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CommentNotFoundError(CommentError):
    status_code = 404
    default_message = "Comment not found"


class CommentPermissionError(CommentError, PermissionError):
    status_code = 403
    default_message = "You are not authorized to modify this comment"


class LikeConflictError(CommentError):
    status_code = 400
    default_message = "Like state conflict"


class CommentService:
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 요청 하나당 저장소 연산 하나를 수행하고, 조회 결과에는 작성자/게시물 정보를 결합합니다.
    - 저장소는 생성 시점에 주입받습니다.
    """
    def __init__(self, store: CommentStore, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or DateTimeUtils.now

    # ------------------------------------------------------------------
    # 직렬화 / 결합(populate)
    # ------------------------------------------------------------------
    def _with_usernames(self, comments: List[Comment]) -> List[Dict[str, Any]]:
        """user 필드를 {'id', 'username'}으로 교체합니다. 사용자가 없으면 None."""
        usernames = self.store.get_usernames(c.user for c in comments)
        results = []
        for comment in comments:
            data = comment.to_dict()
            data['user'] = (
                {'id': comment.user, 'username': usernames[comment.user]}
                if comment.user in usernames else None
            )
            results.append(data)
        return results

    def _with_post_titles(self, comments: List[Comment]) -> List[Dict[str, Any]]:
        """post 필드를 {'id', 'title'}로 교체합니다. 게시물이 없으면 None."""
        titles = self.store.get_post_titles(c.post for c in comments)
        results = []
        for comment in comments:
            data = comment.to_dict()
            data['post'] = (
                {'id': comment.post, 'title': titles[comment.post]}
                if comment.post in titles else None
            )
            results.append(data)
        return results

    def _get_owned_comment(self, comment_id: str, user_id: str, action: str) -> Comment:
        comment = self.store.get(comment_id)
        if comment is None:
            raise CommentNotFoundError()
        if str(comment.user) != str(user_id):
            raise CommentPermissionError(f"You are not authorized to {action} this comment")
        return comment

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create_comment(self, post_id: str, user_id: str, content: str) -> Dict[str, Any]:
        """새로운 댓글을 생성합니다. 작성자는 요청한 사용자입니다."""
        new_comment = Comment(
            comment_id=str(uuid.uuid4()),
            content=content,
            post=post_id,
            user=user_id,
            created_at=self.clock(),
        )
        saved = self.store.insert(new_comment)
        logging.info(f"댓글 생성 완료 (comment_id: {saved.comment_id}, post_id: {post_id})")
        return saved.to_dict()

    def get_comments_for_post(self, post_id: str) -> List[Dict[str, Any]]:
        """특정 게시글의 댓글 전체를 최신순으로 조회합니다."""
        return self._with_usernames(self.store.find_by_post(post_id))

    def get_comment(self, comment_id: str) -> Dict[str, Any]:
        comment = self.store.get(comment_id)
        if comment is None:
            raise CommentNotFoundError()
        return self._with_usernames([comment])[0]

    def update_comment(self, comment_id: str, user_id: str, content: str) -> Dict[str, Any]:
        """댓글 내용을 수정합니다. (작성자 본인만 가능)"""
        self._get_owned_comment(comment_id, user_id, "update")
        updated = self.store.update_content(comment_id, content)
        if updated is None:
            raise CommentNotFoundError()
        return updated.to_dict()

    def delete_comment(self, comment_id: str, user_id: str) -> None:
        """댓글을 삭제합니다. (작성자 본인만 가능)"""
        self._get_owned_comment(comment_id, user_id, "delete")
        if not self.store.delete(comment_id):
            raise CommentNotFoundError()
        logging.info(f"댓글 삭제 완료 (comment_id: {comment_id}, user_id: {user_id})")

    def get_comments_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """특정 사용자가 작성한 댓글을 게시물 제목과 함께 최신순으로 조회합니다."""
        return self._with_post_titles(self.store.find_by_user(user_id))

    def get_paginated_comments(self, page: int, limit: int) -> Dict[str, Any]:
        """
        전체 댓글을 페이지 단위로 조회합니다.
        - page는 1부터 시작하며 (page-1)*limit 개를 건너뜁니다.
        """
        comments = self.store.find_all(skip=(page - 1) * limit, limit=limit)
        total = self.store.count()
        return {
            "comments": self._with_usernames(comments),
            "totalPages": math.ceil(total / limit),
            "currentPage": page,
        }

    def search_comments(self, text: str) -> List[Dict[str, Any]]:
        """content에 text가 포함된 댓글을 대소문자 구분 없이 검색합니다."""
        return self._with_usernames(self.store.search_content(text))

    # ------------------------------------------------------------------
    # 좋아요
    # ------------------------------------------------------------------
    def like_comment(self, comment_id: str, user_id: str) -> Dict[str, Any]:
        comment, changed = self.store.add_like(comment_id, user_id)
        if comment is None:
            raise CommentNotFoundError()
        if not changed:
            raise LikeConflictError("You have already liked this comment")
        return comment.to_dict()

    def unlike_comment(self, comment_id: str, user_id: str) -> Dict[str, Any]:
        comment, changed = self.store.remove_like(comment_id, user_id)
        if comment is None:
            raise CommentNotFoundError()
        if not changed:
            raise LikeConflictError("You have not liked this comment")
        return comment.to_dict()
