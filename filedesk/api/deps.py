# -*- coding: utf-8 -*-
"""
API 依赖注入

提供 FastAPI 依赖注入函数，进程级资源（连接池、存储目录）
在启动事件中创建并挂载在 app.state 上
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from filedesk.core.config import Settings
from filedesk.core.database import Database
from filedesk.core.exceptions import MissingTokenError, InvalidTokenError
from filedesk.core.security import decode_access_token
from filedesk.models.auth import TokenData
from filedesk.services.auth_service import AuthService
from filedesk.services.file_service import FileService
from filedesk.services.user_service import UserService


# 安全方案，缺失时由 get_current_user 返回 401
security = HTTPBearer(auto_error=False)


# =============================================================================
# 进程级资源
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    """获取应用配置"""
    return request.app.state.settings


def get_db(request: Request) -> Database:
    """获取数据库连接池"""
    return request.app.state.db


def get_file_service(request: Request) -> FileService:
    """获取文件服务"""
    return request.app.state.file_service


# =============================================================================
# 服务依赖
# =============================================================================

def get_user_service(db: Database = Depends(get_db)) -> UserService:
    return UserService(db)


def get_auth_service(
    request: Request,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings)
) -> AuthService:
    return AuthService(users, settings, pwd_context=request.app.state.pwd_context)


# =============================================================================
# 认证依赖
# =============================================================================

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_app_settings)
) -> TokenData:
    """
    校验 Bearer Token 并返回当前用户

    只校验签名和过期时间，不查询数据库

    Args:
        request: 当前请求，解码结果写入 request.state.user
        credentials: HTTP Bearer Token
        settings: 应用配置

    Returns:
        TokenData: 用户 Token 数据

    Raises:
        MissingTokenError: 缺少 Token 或不是 Bearer 格式
        InvalidTokenError: 签名错误、已过期或内容不完整
    """
    if credentials is None:
        raise MissingTokenError()

    payload = decode_access_token(credentials.credentials, settings.SECRET_KEY)
    if payload is None:
        raise InvalidTokenError()

    user_id = payload.get("id")
    username = payload.get("username")

    if not isinstance(user_id, str) or not isinstance(username, str):
        raise InvalidTokenError()

    user = TokenData(id=user_id, username=username, exp=payload.get("exp"))
    request.state.user = user
    return user
