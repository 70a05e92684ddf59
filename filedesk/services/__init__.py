# -*- coding: utf-8 -*-
"""
业务服务层

包含所有业务逻辑服务
"""

from .auth_service import AuthService
from .file_service import FileService
from .user_service import UserService

__all__ = [
    "AuthService",
    "FileService",
    "UserService",
]
