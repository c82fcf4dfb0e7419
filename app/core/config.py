# app/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다. 값은 .env 파일에서 로드됩니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 요청의 Bearer 토큰을 검증하는 데 사용하는 서명 키. 토큰 발급은 외부 인증 서비스가 담당합니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')

    # 댓글 저장소 구현체 선택: 'firestore' 또는 'memory'
    COMMENT_STORE = os.getenv('COMMENT_STORE', 'firestore')
    COMMENTS_COLLECTION = os.getenv('COMMENTS_COLLECTION', 'comments')
    USERS_COLLECTION = os.getenv('USERS_COLLECTION', 'users')
    POSTS_COLLECTION = os.getenv('POSTS_COLLECTION', 'posts')

    # /paginate 요청에 limit이 없을 때 사용하는 페이지 크기
    COMMENTS_PAGE_SIZE = int(os.getenv('COMMENTS_PAGE_SIZE', 10))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

class DevelopmentConfig(Config):
    """개발 환경 설정. 코드 변경 시 자동 재시작되고 상세한 디버그 정보가 표시됩니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경 설정. 기본적으로 메모리 저장소를 사용합니다."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'testing-secret-key-with-enough-length')
    COMMENT_STORE = os.getenv('TEST_COMMENT_STORE', 'memory')
    COMMENTS_PAGE_SIZE = 10
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')

class ProductionConfig(Config):
    """운영 환경 설정."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값('development', 'testing', 'production')에 따라 create_app에서 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
