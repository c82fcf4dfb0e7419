# app/api/comments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError

from app.api.comments.schemas import (
    CommentCreateSchema,
    CommentUpdateSchema,
    PaginationQuerySchema,
    CommentResponseSchema,
    PaginatedCommentsSchema,
)
from app.api.comments.services import CommentError


comments_bp = Blueprint('comments_bp', __name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error(message: str, status_code: int):
    return jsonify({"error": message}), status_code


@comments_bp.route('/', methods=['POST'])
@jwt_required()
def create_comment():
    """
    새로운 댓글을 작성합니다. 작성자는 토큰의 사용자입니다.
    - 성공 시, 생성된 댓글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    comment_service = current_app.services['comments']
    user_id = get_jwt_identity()
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        new_comment = comment_service.create_comment(data['post_id'], user_id, data['content'])
        return jsonify(CommentResponseSchema().dump(new_comment)), 201
    except ValidationError:
        return _error("Content and postId are required", 400)
    except Exception as e:
        logging.error(f"Error creating comment (user_id: {user_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/paginate', methods=['GET'])
def get_paginated_comments():
    """전체 댓글을 페이지네이션으로 조회합니다. (page 기본값 1, limit 기본값 10)"""
    comment_service = current_app.services['comments']
    try:
        params = PaginationQuerySchema().load(request.args)
    except ValidationError:
        return _error("page and limit must be positive integers", 400)

    limit = params['limit'] or current_app.config['COMMENTS_PAGE_SIZE']
    try:
        result = comment_service.get_paginated_comments(params['page'], limit)
        return jsonify(PaginatedCommentsSchema().dump(result)), 200
    except Exception as e:
        logging.error(f"Error retrieving paginated comments: {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


def _search(text: str, missing_message: str):
    if not text:
        return _error(missing_message, 400)
    comment_service = current_app.services['comments']
    try:
        comments = comment_service.search_comments(text)
        return jsonify(CommentResponseSchema(many=True).dump(comments)), 200
    except Exception as e:
        logging.error(f"Error searching comments (text: {text!r}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/search', methods=['GET'])
def search_comments():
    """content에 검색어가 포함된 댓글을 대소문자 구분 없이 조회합니다."""
    return _search(request.args.get('query', ''), "Query parameter is required")


@comments_bp.route('/keyword', methods=['GET'])
def get_comments_by_keyword():
    """/search와 동일한 검색을 keyword 파라미터로 제공합니다."""
    return _search(request.args.get('keyword', ''), "Keyword parameter is required")


@comments_bp.route('/comment/<string:comment_id>', methods=['GET'])
def get_comment(comment_id: str):
    """단일 댓글을 작성자 username과 함께 조회합니다."""
    comment_service = current_app.services['comments']
    try:
        comment = comment_service.get_comment(comment_id)
        return jsonify(CommentResponseSchema().dump(comment)), 200
    except CommentError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logging.error(f"Error retrieving comment (comment_id: {comment_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/user/<string:user_id>', methods=['GET'])
def get_user_comments(user_id: str):
    """특정 사용자가 작성한 댓글 목록을 게시물 제목과 함께 조회합니다."""
    comment_service = current_app.services['comments']
    try:
        comments = comment_service.get_comments_by_user(user_id)
        return jsonify(CommentResponseSchema(many=True).dump(comments)), 200
    except Exception as e:
        logging.error(f"Error retrieving user comments (user_id: {user_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/<string:post_id>', methods=['GET'])
def get_post_comments(post_id: str):
    """특정 게시글의 댓글 목록을 최신순으로 조회합니다."""
    comment_service = current_app.services['comments']
    try:
        comments = comment_service.get_comments_for_post(post_id)
        return jsonify(CommentResponseSchema(many=True).dump(comments)), 200
    except Exception as e:
        logging.error(f"Error retrieving comments (post_id: {post_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/<string:comment_id>', methods=['PUT'])
@jwt_required()
def update_comment(comment_id: str):
    """댓글 내용을 수정합니다. (작성자 본인만 가능)"""
    comment_service = current_app.services['comments']
    user_id = get_jwt_identity()
    try:
        data = CommentUpdateSchema().load(request.get_json(silent=True) or {})
        updated = comment_service.update_comment(comment_id, user_id, data['content'])
        return jsonify(CommentResponseSchema().dump(updated)), 200
    except ValidationError:
        return _error("commentId and content are required", 400)
    except CommentError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logging.error(f"Error updating comment (comment_id: {comment_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/<string:comment_id>', methods=['DELETE'])
@comments_bp.route('/delete/<string:comment_id>', methods=['DELETE'])
@jwt_required()
def delete_comment(comment_id: str):
    """댓글을 삭제합니다. (작성자 본인만 가능)"""
    comment_service = current_app.services['comments']
    user_id = get_jwt_identity()
    try:
        comment_service.delete_comment(comment_id, user_id)
        return jsonify({"message": "Comment deleted successfully"}), 200
    except CommentError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logging.error(f"Error deleting comment (comment_id: {comment_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/<string:comment_id>/like', methods=['POST'])
@jwt_required()
def like_comment(comment_id: str):
    """댓글에 좋아요를 누릅니다. 이미 누른 경우 400을 반환합니다."""
    comment_service = current_app.services['comments']
    user_id = get_jwt_identity()
    try:
        comment = comment_service.like_comment(comment_id, user_id)
        return jsonify(CommentResponseSchema().dump(comment)), 200
    except CommentError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logging.error(f"Error liking comment (comment_id: {comment_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)


@comments_bp.route('/<string:comment_id>/unlike', methods=['POST'])
@jwt_required()
def unlike_comment(comment_id: str):
    """댓글 좋아요를 취소합니다. 좋아요를 누르지 않은 경우 400을 반환합니다."""
    comment_service = current_app.services['comments']
    user_id = get_jwt_identity()
    try:
        comment = comment_service.unlike_comment(comment_id, user_id)
        return jsonify(CommentResponseSchema().dump(comment)), 200
    except CommentError as e:
        return _error(e.message, e.status_code)
    except Exception as e:
        logging.error(f"Error unliking comment (comment_id: {comment_id}): {e}", exc_info=True)
        return _error(INTERNAL_ERROR_MESSAGE, 500)
