# app/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from typing import Optional
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from flask_jwt_extended import JWTManager
import firebase_admin
from firebase_admin import credentials

# - 설정
from app.core.config import config_by_name

# - API 블루프린트
from app.api.comments.routes import comments_bp

# - 서비스 / 저장소
from app.api.comments.services import CommentService
from app.services.comment_store import CommentStore
from app.services.memory_comment_store import InMemoryCommentStore
from app.services.firestore_comment_store import FirestoreCommentStore


def _init_firebase(app: Flask) -> None:
    """Firebase Admin SDK를 한 번만 초기화합니다."""
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    firebase_admin.initialize_app(credentials.Certificate(cred_path))


def _build_comment_store(app: Flask) -> CommentStore:
    """설정(COMMENT_STORE)에 맞는 댓글 저장소 구현체를 생성합니다."""
    backend = app.config['COMMENT_STORE']
    if backend == 'memory':
        return InMemoryCommentStore()
    if backend == 'firestore':
        _init_firebase(app)
        return FirestoreCommentStore(
            comments_collection=app.config['COMMENTS_COLLECTION'],
            users_collection=app.config['USERS_COLLECTION'],
            posts_collection=app.config['POSTS_COLLECTION'],
        )
    raise ValueError(f"지원하지 않는 COMMENT_STORE 값입니다: {backend}")


def create_app(config_name: Optional[str] = None, comment_store: Optional[CommentStore] = None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' / 'testing' / 'production'. 없으면 FLASK_ENV를 사용합니다.
    :param comment_store: 주입할 댓글 저장소. 없으면 설정에 따라 생성합니다.
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')
    if config_name not in config_by_name:
        raise ValueError(f"알 수 없는 설정 이름입니다: {config_name}")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 인증(JWT) 설정: 토큰 발급은 외부 서비스, 여기서는 검증과 identity 추출만 담당
    # =====================================================================================
    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def handle_missing_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.invalid_token_loader
    def handle_invalid_token(reason):
        return jsonify({"error": reason}), 401

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token has expired"}), 401

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    if comment_store is None:
        try:
            comment_store = _build_comment_store(app)
            logging.info(f"Comment store initialized ({app.config['COMMENT_STORE']})")
        except Exception as e:
            logging.error(f"Failed to initialize comment store: {e}")
            raise

    app.services['comment_store'] = comment_store
    app.services['comments'] = CommentService(store=comment_store)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(comments_bp, url_prefix='/api/comments')

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        # 존재하지 않는 경로, 허용되지 않는 메서드 등
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=app.config['LOG_LEVEL'], format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
