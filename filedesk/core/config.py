# -*- coding: utf-8 -*-
"""
配置管理模块

使用 Pydantic Settings 管理应用配置
支持环境变量、.env 文件和 config.ini 文件
"""

import os
import configparser
from pathlib import Path
from typing import Optional, List, Dict, Any
from functools import lru_cache
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SECRET_KEY = "default_secret_key"


class Settings(BaseSettings):
    """应用配置"""

    # 应用基本信息
    PROJECT_NAME: str = "FileDesk"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "账户认证与文件夹管理后端"

    # 服务器配置
    HOST: str = Field(default="0.0.0.0", alias="FILEDESK_HOST")
    PORT: int = Field(default=3000, alias="FILEDESK_PORT")

    # 安全配置（生产环境必须通过环境变量覆盖默认密钥）
    SECRET_KEY: str = Field(default=DEFAULT_SECRET_KEY, alias="FILEDESK_SECRET_KEY")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60, alias="FILEDESK_ACCESS_TOKEN_EXPIRE_MINUTES")
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31, alias="FILEDESK_BCRYPT_ROUNDS")

    # 数据库配置
    DATABASE_URL: str = Field(default="sqlite:///./filedesk.db", alias="FILEDESK_DATABASE_URL")
    DB_POOL_SIZE: int = Field(default=10, ge=1, alias="FILEDESK_DB_POOL_SIZE")
    # None 表示无限等待空闲连接
    DB_POOL_TIMEOUT: Optional[float] = Field(default=None, alias="FILEDESK_DB_POOL_TIMEOUT")

    # 测试模式
    TESTING: bool = Field(default=False, alias="FILEDESK_TESTING")

    # 存储配置
    STORAGE_DIR: str = Field(default="uploads", alias="FILEDESK_STORAGE_DIR")

    # 上传配置
    MAX_UPLOAD_SIZE: int = Field(default=104857600, alias="FILEDESK_MAX_UPLOAD_SIZE")  # 100MB
    UPLOAD_OVERWRITE: bool = Field(default=True, alias="FILEDESK_UPLOAD_OVERWRITE")
    UPLOAD_SANITIZE_FILENAMES: bool = Field(default=False, alias="FILEDESK_UPLOAD_SANITIZE_FILENAMES")

    # CORS 配置
    CORS_ORIGINS: List[str] = Field(default=["*"], alias="FILEDESK_CORS_ORIGINS")

    # SSL/TLS 配置
    SSL_CERTFILE: Optional[str] = Field(default=None, alias="FILEDESK_SSL_CERTFILE")
    SSL_KEYFILE: Optional[str] = Field(default=None, alias="FILEDESK_SSL_KEYFILE")

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", alias="FILEDESK_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def uses_default_secret(self) -> bool:
        """是否仍在使用默认密钥"""
        return self.SECRET_KEY == DEFAULT_SECRET_KEY

    @classmethod
    def from_config_file(cls, config_path: Optional[Path] = None) -> "Settings":
        """
        从 config.ini 文件加载配置

        环境变量和 .env 文件中已存在的配置项不会被 config.ini 覆盖

        Args:
            config_path: config.ini 文件路径，默认为项目根目录下的 config.ini

        Returns:
            Settings: 配置对象
        """
        if config_path is None:
            config_path = Path(__file__).parent.parent.parent / "config.ini"

        if not config_path.exists():
            return cls()

        config = configparser.ConfigParser()
        config.read(config_path, encoding="utf-8")

        defined = set(os.environ)
        env_file = cls.model_config.get("env_file")
        if env_file and Path(env_file).is_file():
            defined.update(dotenv_values(env_file))

        # (section, key) -> (alias, 类型转换)
        mapping = {
            ("server", "host"): ("FILEDESK_HOST", str),
            ("server", "port"): ("FILEDESK_PORT", int),
            ("security", "secret_key"): ("FILEDESK_SECRET_KEY", str),
            ("security", "token_expire_minutes"): ("FILEDESK_ACCESS_TOKEN_EXPIRE_MINUTES", int),
            ("security", "bcrypt_rounds"): ("FILEDESK_BCRYPT_ROUNDS", int),
            ("database", "url"): ("FILEDESK_DATABASE_URL", str),
            ("database", "pool_size"): ("FILEDESK_DB_POOL_SIZE", int),
            ("database", "pool_timeout"): ("FILEDESK_DB_POOL_TIMEOUT", float),
            ("storage", "dir"): ("FILEDESK_STORAGE_DIR", str),
            ("upload", "max_size"): ("FILEDESK_MAX_UPLOAD_SIZE", int),
            ("upload", "overwrite"): ("FILEDESK_UPLOAD_OVERWRITE", _parse_bool),
            ("upload", "sanitize_filenames"): ("FILEDESK_UPLOAD_SANITIZE_FILENAMES", _parse_bool),
        }

        config_dict: Dict[str, Any] = {}
        for (section, key), (alias, convert) in mapping.items():
            if section in config and key in config[section] and alias not in defined:
                config_dict[alias] = convert(config[section][key])

        # CORS 配置
        if "cors" in config and "allow_origins" in config["cors"]:
            if "FILEDESK_CORS_ORIGINS" not in defined:
                origins = config["cors"]["allow_origins"].split(",")
                config_dict["FILEDESK_CORS_ORIGINS"] = [
                    origin.strip() for origin in origins if origin.strip()
                ]

        return cls(**config_dict)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> Settings:
    """
    加载配置

    优先级: 环境变量 > .env > config.ini > 默认值

    Returns:
        Settings: 配置对象
    """
    return Settings.from_config_file()


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置单例

    使用 lru_cache 确保只创建一次

    Returns:
        Settings: 配置对象
    """
    return load_config()
