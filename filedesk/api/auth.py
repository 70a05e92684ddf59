# -*- coding: utf-8 -*-
"""
认证相关 API 路由
"""

from fastapi import APIRouter, Depends, status

from filedesk.api.deps import get_auth_service
from filedesk.services.auth_service import AuthService
from filedesk.models.user import SignupRequest, SigninRequest
from filedesk.models.auth import SigninResponse, MessageResponse


router = APIRouter(tags=["认证"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: SignupRequest,
    service: AuthService = Depends(get_auth_service)
):
    """
    用户注册

    Args:
        user_data: 注册数据 (JSON 格式)
        service: 认证服务

    Returns:
        MessageResponse: 注册成功消息
    """
    return service.signup(
        user_data.fullname,
        user_data.nidn,
        user_data.username,
        user_data.password
    )


@router.post("/signin", response_model=SigninResponse)
def signin(
    user_data: SigninRequest,
    service: AuthService = Depends(get_auth_service)
):
    """
    用户登录

    Args:
        user_data: 登录数据 (JSON 格式)
        service: 认证服务

    Returns:
        SigninResponse: 包含 token 的响应
    """
    return service.signin(user_data.username, user_data.password)
