# app/api/comments/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from app.utils.datetime_utils import DateTimeUtils


class ScalarString(fields.String):
    """숫자 값은 문자열로 변환해 받습니다. (bool, 객체, 배열은 그대로 거부)"""
    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        return super()._deserialize(value, attr, data, **kwargs)


class CommentCreateSchema(Schema):
    """
    POST /api/comments/
    댓글 생성 요청 본문. content와 postId 모두 비어 있으면 안 됩니다.
    """
    class Meta:
        unknown = EXCLUDE

    content = ScalarString(required=True, validate=validate.Length(min=1))
    post_id = ScalarString(required=True, data_key='postId', validate=validate.Length(min=1))


class CommentUpdateSchema(Schema):
    """PUT /api/comments/{comment_id} 요청 본문."""
    class Meta:
        unknown = EXCLUDE

    content = ScalarString(required=True, validate=validate.Length(min=1))


class PaginationQuerySchema(Schema):
    """GET /api/comments/paginate 쿼리 스트링. limit이 없으면 설정값을 사용합니다."""
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    limit = fields.Int(load_default=None, validate=validate.Range(min=1))


class CommentResponseSchema(Schema):
    """
    댓글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    - user/post는 참조 ID(문자열)이거나, 결합된 경우 {'id', 'username'} / {'id', 'title'} 객체입니다.
    """
    id = fields.Str(attribute='comment_id', dump_only=True)
    content = fields.Str(required=True)
    post = fields.Raw(allow_none=True)
    user = fields.Raw(allow_none=True)
    likes = fields.List(fields.Str())
    created_at = fields.Method('dump_created_at', data_key='createdAt')

    def dump_created_at(self, obj):
        created_at = obj.get('created_at') if isinstance(obj, dict) else obj.created_at
        return DateTimeUtils.to_iso_string(created_at) if created_at else None


class PaginatedCommentsSchema(Schema):
    """GET /api/comments/paginate 응답 형식."""
    comments = fields.List(fields.Nested(CommentResponseSchema))
    totalPages = fields.Int()
    currentPage = fields.Int()
