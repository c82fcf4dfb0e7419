# app/models/comment.py
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Dict, Any, Optional

from app.utils.datetime_utils import DateTimeUtils

@dataclass
class Comment:
    """
    Firestore 'comments' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    - post, user는 생성 이후 변경되지 않는 참조 ID입니다.
    - likes는 좋아요를 누른 user_id 목록이며 중복을 허용하지 않습니다.
    """
    comment_id: str
    content: str
    post: str
    user: str
    likes: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = field(default_factory=DateTimeUtils.now)

    def to_dict(self) -> Dict[str, Any]:
        """Firestore 저장 및 응답 직렬화에 사용할 dict로 변환합니다."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        """Firestore 문서(dict)로부터 Comment 객체를 생성합니다."""
        data = DateTimeUtils.from_firestore(data)
        # 이관된 문서는 created_at이 ISO 문자열이거나 없을 수 있습니다. (없으면 None, 정렬 시 맨 뒤)
        created_at = data.get('created_at')
        if isinstance(created_at, str):
            created_at = DateTimeUtils.parse_iso_datetime(created_at)
        return cls(
            comment_id=data['comment_id'],
            content=data['content'],
            post=data['post'],
            user=data['user'],
            likes=list(data.get('likes') or []),
            created_at=created_at,
        )
