import os

from dotenv import load_dotenv

# .env読み込み（Flask起動前に必ず実行）
load_dotenv()


_BOOL_TRUE = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _BOOL_TRUE


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    """Flask application configuration populated from environment variables."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 相対パスの SQLite はインスタンスフォルダに作成される
    db_uri = os.environ.get("DATABASE_URI", "sqlite:///highsoft.db")
    SQLALCHEMY_DATABASE_URI = db_uri

    # Database stability
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }

    if not db_uri.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS.update({
            "pool_size": _env_int("DB_POOL_SIZE", 10),
            "max_overflow": _env_int("DB_MAX_OVERFLOW", 20),
            # 接続枯渇時に登録リクエストを待たせ続けない
            "pool_timeout": _env_int("DB_POOL_TIMEOUT", 10),
        })

    # Client registration
    REGISTRATION_DEFAULT_ROLE_ID = _env_int("REGISTRATION_DEFAULT_ROLE_ID", 2)
    REGISTRATION_INITIAL_STATUS = os.environ.get("REGISTRATION_INITIAL_STATUS", "Activo")
    REGISTRATION_HASH_PASSWORDS = _env_bool("REGISTRATION_HASH_PASSWORDS", True)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # OpenAPI (flask-smorest)
    API_TITLE = "Highsoft Spa API"
    API_VERSION = "1.0.0"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///highsoft-test.db"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    LOG_LEVEL = "WARNING"
