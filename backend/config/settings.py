"""
应用全局配置

从 config.yaml 加载配置，支持环境变量覆盖
"""

import yaml
from pathlib import Path
from typing import Optional, List
import os


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config.yaml"


class Settings:
    """应用全局配置（从 config.yaml 加载）"""

    def __init__(self, config_path: Optional[str] = None):
        # 加载 config.yaml（CONFIG_PATH 可指定其他文件）
        path = Path(config_path or os.getenv("CONFIG_PATH") or DEFAULT_CONFIG_PATH)
        with open(path, 'r', encoding='utf-8') as f:
            self._config = yaml.safe_load(f) or {}

    def _section(self, name: str) -> dict:
        return self._config.get(name) or {}

    # ==================== 应用基础配置 ====================
    @property
    def APP_NAME(self) -> str:
        return os.getenv("APP_NAME", self._section("app").get("name", "Follow Graph Service"))

    @property
    def APP_VERSION(self) -> str:
        return os.getenv("APP_VERSION", str(self._section("app").get("version", "0.1.0")))

    @property
    def API_V1_PREFIX(self) -> str:
        return os.getenv("API_V1_PREFIX", self._section("app").get("api_prefix", "/api/v1"))

    @property
    def DEBUG(self) -> bool:
        debug_str = os.getenv("DEBUG", str(self._section("app").get("debug", False)))
        return debug_str.lower() in ("true", "1", "yes")

    # ==================== 数据库配置 ====================
    @property
    def DATABASE_URL(self) -> Optional[str]:
        return os.getenv("DATABASE_URL", self._section("database").get("url"))

    @property
    def DATABASE_POOL_SIZE(self) -> int:
        return int(os.getenv("DATABASE_POOL_SIZE", self._section("database").get("pool_size", 10)))

    @property
    def DATABASE_MAX_OVERFLOW(self) -> int:
        return int(os.getenv("DATABASE_MAX_OVERFLOW", self._section("database").get("max_overflow", 20)))

    @property
    def DATABASE_POOL_TIMEOUT(self) -> int:
        return int(os.getenv("DATABASE_POOL_TIMEOUT", self._section("database").get("pool_timeout", 30)))

    @property
    def DATABASE_COMMAND_TIMEOUT(self) -> int:
        return int(os.getenv("DATABASE_COMMAND_TIMEOUT", self._section("database").get("command_timeout", 10)))

    @property
    def DATABASE_AUTO_CREATE(self) -> bool:
        auto_str = os.getenv("DATABASE_AUTO_CREATE", str(self._section("database").get("auto_create", True)))
        return auto_str.lower() in ("true", "1", "yes")

    # ==================== 日志配置 ====================
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv("LOG_LEVEL", self._section("logging").get("level", "INFO")).upper()

    @property
    def LOG_FILE(self) -> Optional[str]:
        return os.getenv("LOG_FILE", self._section("logging").get("file")) or None

    @property
    def LOG_ROTATION(self) -> str:
        return os.getenv("LOG_ROTATION", self._section("logging").get("rotation", "10 MB"))

    @property
    def LOG_RETENTION(self) -> str:
        return os.getenv("LOG_RETENTION", self._section("logging").get("retention", "7 days"))

    @property
    def ACCESS_LOG(self) -> bool:
        access_str = os.getenv("ACCESS_LOG", str(self._section("logging").get("access_log", True)))
        return access_str.lower() in ("true", "1", "yes")

    # ==================== 分页配置 ====================
    @property
    def DEFAULT_PAGE_SIZE(self) -> int:
        return int(os.getenv("DEFAULT_PAGE_SIZE", self._section("pagination").get("default_limit", 20)))

    @property
    def MAX_PAGE_SIZE(self) -> int:
        return int(os.getenv("MAX_PAGE_SIZE", self._section("pagination").get("max_limit", 100)))

    # ==================== CORS 配置 ====================
    @property
    def CORS_ORIGINS(self) -> List[str]:
        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            return [origin.strip() for origin in env_origins.split(",")]
        return self._section("cors").get("origins", ["*"])


# 全局配置实例
settings = Settings()
