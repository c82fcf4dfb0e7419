# app/services/comment_store.py
"""
댓글 저장소 인터페이스

CommentService는 이 인터페이스에만 의존하며, 앱 팩토리에서 구현체
(FirestoreCommentStore 또는 InMemoryCommentStore)를 생성해 주입합니다.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.comment import Comment


class StoreError(Exception):
    """저장소(DB) 호출이 실패했을 때 발생하는 예외. 원본 예외는 __cause__에 남습니다."""


class CommentStore(ABC):
    """
    댓글 컬렉션에 대한 조회/변경 연산 집합.
    - 모든 목록 조회는 created_at 내림차순(최신순)으로 반환합니다.
    - add_like / remove_like는 멤버십 확인과 변경을 하나의 원자적 연산으로 수행합니다.
    """

    @abstractmethod
    def insert(self, comment: Comment) -> Comment:
        """새 댓글을 저장하고 저장된 댓글을 반환합니다."""

    @abstractmethod
    def get(self, comment_id: str) -> Optional[Comment]:
        """ID로 댓글을 조회합니다. 없으면 None."""

    @abstractmethod
    def find_by_post(self, post_id: str) -> List[Comment]:
        """특정 게시물의 댓글 목록."""

    @abstractmethod
    def find_by_user(self, user_id: str) -> List[Comment]:
        """특정 사용자가 작성한 댓글 목록."""

    @abstractmethod
    def find_all(self, skip: int = 0, limit: Optional[int] = None) -> List[Comment]:
        """전체 댓글 중 skip개를 건너뛰고 최대 limit개를 반환합니다."""

    @abstractmethod
    def count(self) -> int:
        """전체 댓글 수."""

    @abstractmethod
    def search_content(self, text: str) -> List[Comment]:
        """content에 text가 대소문자 구분 없이 포함된 댓글 목록."""

    @abstractmethod
    def update_content(self, comment_id: str, content: str) -> Optional[Comment]:
        """content를 교체하고 변경된 댓글을 반환합니다. 없으면 None."""

    @abstractmethod
    def delete(self, comment_id: str) -> bool:
        """댓글을 삭제합니다. 삭제했으면 True."""

    @abstractmethod
    def add_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        """
        user_id가 likes에 없을 때만 추가합니다.

        :return: (댓글, 변경 여부). 댓글이 없으면 (None, False),
                 이미 좋아요 상태면 (현재 댓글, False)
        """

    @abstractmethod
    def remove_like(self, comment_id: str, user_id: str) -> Tuple[Optional[Comment], bool]:
        """
        user_id가 likes에 있을 때만 제거합니다.

        :return: (댓글, 변경 여부). 댓글이 없으면 (None, False),
                 좋아요 상태가 아니면 (현재 댓글, False)
        """

    @abstractmethod
    def get_usernames(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """user_id -> username 매핑. 존재하지 않는 사용자는 결과에서 빠집니다."""

    @abstractmethod
    def get_post_titles(self, post_ids: Iterable[str]) -> Dict[str, str]:
        """post_id -> title 매핑. 존재하지 않는 게시물은 결과에서 빠집니다."""
