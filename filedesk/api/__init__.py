# -*- coding: utf-8 -*-
"""
API 路由模块

包含所有 FastAPI 路由和依赖注入
"""

from .deps import (
    get_app_settings,
    get_db,
    get_file_service,
    get_auth_service,
    get_current_user
)

__all__ = [
    "get_app_settings",
    "get_db",
    "get_file_service",
    "get_auth_service",
    "get_current_user",
]
