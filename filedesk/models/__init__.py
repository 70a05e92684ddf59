# -*- coding: utf-8 -*-
"""
数据模型 (Pydantic Models)

定义所有 Pydantic 数据模型，用于请求/响应验证
"""

from .user import (
    SignupRequest,
    SigninRequest,
    UserRecord
)
from .auth import (
    TokenData,
    SigninResponse,
    MessageResponse
)
from .file import (
    FileEntry,
    FolderCreate,
    ItemDelete,
    UploadResponse
)

__all__ = [
    # 用户相关
    "SignupRequest",
    "SigninRequest",
    "UserRecord",
    # 认证相关
    "TokenData",
    "SigninResponse",
    "MessageResponse",
    # 文件相关
    "FileEntry",
    "FolderCreate",
    "ItemDelete",
    "UploadResponse",
]
