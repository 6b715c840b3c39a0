"""
应用全局配置

默认值来自 config.yaml，同名环境变量优先（.env 会先被加载进环境）。
每次读取属性都会重新查看环境变量，测试里 monkeypatch.setenv 即可生效
"""

import os
from pathlib import Path
from typing import Any, List, Optional

import dotenv
import yaml

dotenv.load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config.yaml"


def _as_bool(value) -> bool:
    return str(value).lower() in ("true", "1", "yes")


class Settings:
    """config.yaml + 环境变量"""

    def __init__(self, config_path: Optional[str] = None):
        path = config_path or os.getenv("PAGEBOUND_CONFIG") or DEFAULT_CONFIG_PATH
        with open(path, "r", encoding="utf-8") as f:
            self._config = yaml.safe_load(f) or {}

    def _get(self, env_name: str, section: str, key: str, default: Any = None) -> Any:
        value = os.getenv(env_name)
        if value is not None:
            return value
        return self._config.get(section, {}).get(key, default)

    # app
    @property
    def APP_NAME(self) -> str:
        return self._get("APP_NAME", "app", "name", "Pagebound")

    @property
    def APP_VERSION(self) -> str:
        return self._get("APP_VERSION", "app", "version", "0.0.0")

    @property
    def API_V1_PREFIX(self) -> str:
        return self._get("API_V1_PREFIX", "app", "api_prefix", "/api/v1")

    @property
    def DEBUG(self) -> bool:
        return _as_bool(self._get("DEBUG", "app", "debug", False))

    # database
    @property
    def DATABASE_ENABLED(self) -> bool:
        return _as_bool(self._get("DATABASE_ENABLED", "database", "enabled", True))

    @property
    def DATABASE_URL(self) -> Optional[str]:
        """数据库未启用时为 None"""
        if not self.DATABASE_ENABLED:
            return None
        return self._get("DATABASE_URL", "database", "url")

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(self._get("DATABASE_POOL_SIZE", "database", "pool_size", 5))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(self._get("DATABASE_MAX_OVERFLOW", "database", "max_overflow", 10))

    @property
    def DATABASE_AUTO_CREATE(self) -> bool:
        return _as_bool(self._get("DATABASE_AUTO_CREATE", "database", "auto_create", True))

    # jwt
    @property
    def JWT_SECRET_KEY(self) -> str:
        return self._get("JWT_SECRET_KEY", "jwt", "secret_key")

    @property
    def JWT_ALGORITHM(self) -> str:
        return self._get("JWT_ALGORITHM", "jwt", "algorithm", "HS256")

    @property
    def JWT_EXPIRE_MINUTES(self) -> int:
        return int(self._get("JWT_EXPIRE_MINUTES", "jwt", "expire_minutes", 720))

    # admin
    @property
    def ADMIN_PASSWORD_HASH(self) -> str:
        """空字符串表示未配置，此时管理员登录一律失败"""
        return self._get("ADMIN_PASSWORD_HASH", "admin", "password_hash") or ""

    # cors
    @property
    def CORS_ORIGINS(self) -> List[str]:
        raw = os.getenv("CORS_ORIGINS")
        if raw:
            return [origin.strip() for origin in raw.split(",") if origin.strip()]
        return self._config.get("cors", {}).get("origins", ["*"])

    # logging
    @property
    def LOG_LEVEL(self) -> str:
        return self._get("LOG_LEVEL", "logging", "level", "INFO")

    @property
    def LOG_FILE(self) -> Optional[str]:
        return self._get("LOG_FILE", "logging", "file")

    @property
    def LOG_ROTATION(self) -> str:
        return self._get("LOG_ROTATION", "logging", "rotation", "10 MB")

    @property
    def LOG_RETENTION(self) -> str:
        return self._get("LOG_RETENTION", "logging", "retention", "7 days")

    # reader
    @property
    def COMMENTS_NESTED(self) -> bool:
        return _as_bool(self._get("COMMENTS_NESTED", "reader", "comments_nested", True))

    @property
    def COMMENT_DISPLAY_DEPTH(self) -> int:
        return int(self._get("COMMENT_DISPLAY_DEPTH", "reader", "comment_display_depth", 2))

    @property
    def TEXT_SIZE_CONTROLS(self) -> bool:
        return _as_bool(self._get("TEXT_SIZE_CONTROLS", "reader", "text_size_controls", True))

    @property
    def READING_SPEED_CONTROLS(self) -> bool:
        return _as_bool(self._get("READING_SPEED_CONTROLS", "reader", "reading_speed_controls", False))

    @property
    def WORDS_PER_MINUTE(self) -> int:
        return int(self._get("WORDS_PER_MINUTE", "reader", "words_per_minute", 200))

    # engagement
    @property
    def BUMP_STORY_COUNTERS(self) -> bool:
        return _as_bool(self._get("BUMP_STORY_COUNTERS", "engagement", "bump_story_counters", True))

    # importer
    @property
    def IMPORT_WORDS_PER_PAGE(self) -> int:
        return int(self._get("IMPORT_WORDS_PER_PAGE", "importer", "words_per_page", 500))

    @property
    def IMPORT_HEADING_MIN_LENGTH(self) -> int:
        return int(self._get("IMPORT_HEADING_MIN_LENGTH", "importer", "heading_min_length", 5))

    @property
    def IMPORT_HEADING_MAX_LENGTH(self) -> int:
        return int(self._get("IMPORT_HEADING_MAX_LENGTH", "importer", "heading_max_length", 50))


settings = Settings()
