# -*- coding: utf-8 -*-
"""
核心模块

包含配置管理、数据库连接池、异常定义、安全功能等核心组件
"""

from .config import Settings, get_settings
from .security import (
    verify_password,
    hash_password,
    create_access_token,
    decode_access_token,
    build_password_context,
    pwd_context
)

__all__ = [
    "Settings",
    "get_settings",
    "verify_password",
    "hash_password",
    "create_access_token",
    "decode_access_token",
    "build_password_context",
    "pwd_context",
]
