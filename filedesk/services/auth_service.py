# -*- coding: utf-8 -*-
"""
认证服务

处理注册与登录相关的业务逻辑
"""

import uuid
import logging
from datetime import timedelta
from typing import Optional

from passlib.context import CryptContext

from filedesk.core.config import Settings
from filedesk.core.exceptions import (
    MissingFieldError,
    UserNotFoundError,
    WrongPasswordError
)
from filedesk.core.security import (
    build_password_context,
    hash_password,
    verify_password,
    create_access_token
)
from filedesk.models.auth import SigninResponse, MessageResponse
from filedesk.models.user import UserRecord
from filedesk.services.user_service import UserService


logger = logging.getLogger(__name__)


class AuthService:
    """认证服务"""

    def __init__(
        self,
        users: UserService,
        settings: Settings,
        pwd_context: Optional[CryptContext] = None
    ):
        """
        初始化认证服务

        Args:
            users: 用户存储服务
            settings: 应用配置（密钥、过期时间、bcrypt 成本）
            pwd_context: 密码哈希上下文，默认按配置创建
        """
        self.users = users
        self.settings = settings
        self.pwd_context = pwd_context or build_password_context(settings.BCRYPT_ROUNDS)

    def signup(
        self,
        fullname: Optional[str],
        nidn: Optional[str],
        username: Optional[str],
        password: Optional[str]
    ) -> MessageResponse:
        """
        用户注册

        Args:
            fullname: 姓名
            nidn: 教职工编号
            username: 用户名
            password: 明文密码

        Returns:
            MessageResponse: 注册成功消息

        Raises:
            MissingFieldError: 有字段为空
            DuplicateUsernameError: 用户名已存在
        """
        if not fullname or not nidn or not username or not password:
            raise MissingFieldError("All fields are required")

        user = UserRecord(
            id=str(uuid.uuid4()),
            fullname=fullname,
            nidn=nidn,
            username=username,
            password=hash_password(password, self.pwd_context)
        )
        self.users.insert(user)

        return MessageResponse(message="Registration successful")

    def signin(self, username: Optional[str], password: Optional[str]) -> SigninResponse:
        """
        用户登录

        Args:
            username: 用户名
            password: 明文密码

        Returns:
            SigninResponse: 包含 token 的响应

        Raises:
            MissingFieldError: 用户名或密码为空
            UserNotFoundError: 用户不存在
            WrongPasswordError: 密码错误
        """
        if not username or not password:
            raise MissingFieldError("Username and password are required")

        user = self.users.find_by_username(username)
        if user is None:
            logger.warning(f"登录失败，用户不存在: {username}")
            raise UserNotFoundError()

        if not verify_password(password, user.password, self.pwd_context):
            logger.warning(f"登录失败，密码错误: {username}")
            raise WrongPasswordError()

        token = create_access_token(
            {"sub": user.id, "id": user.id, "username": user.username},
            self.settings.SECRET_KEY,
            expires_delta=timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        )

        logger.info(f"用户登录: {user.username}")
        return SigninResponse(message="Login successful", token=token)
