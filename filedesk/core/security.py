# -*- coding: utf-8 -*-
"""
安全模块

包含密码哈希、JWT Token 生成和验证等安全功能
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from passlib.context import CryptContext
from jose import JWTError, jwt


ALGORITHM = "HS256"
DEFAULT_EXPIRE_MINUTES = 60


def build_password_context(rounds: int = 10) -> CryptContext:
    """
    创建密码哈希上下文（使用 bcrypt）

    Args:
        rounds: bcrypt 成本因子

    Returns:
        CryptContext: 密码哈希上下文
    """
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


# 默认密码哈希上下文
pwd_context = build_password_context()


def hash_password(password: str, context: Optional[CryptContext] = None) -> str:
    """
    对密码进行哈希处理

    Args:
        password: 原始密码
        context: 密码哈希上下文，默认使用全局上下文

    Returns:
        str: 哈希后的密码
    """
    return (context or pwd_context).hash(password)


def verify_password(
    plain_password: str,
    hashed_password: str,
    context: Optional[CryptContext] = None
) -> bool:
    """
    验证密码（常量时间比较）

    Args:
        plain_password: 原始密码
        hashed_password: 哈希后的密码
        context: 密码哈希上下文，默认使用全局上下文

    Returns:
        bool: 密码是否匹配
    """
    try:
        return (context or pwd_context).verify(plain_password, hashed_password)
    except ValueError:
        # 存储的哈希格式无法识别
        return False


def create_access_token(
    data: Dict[str, Any],
    secret_key: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    创建 JWT Access Token

    Args:
        data: 要编码的数据（通常是 id, username）
        secret_key: 签名密钥
        expires_delta: 过期时间增量，默认 60 分钟

    Returns:
        str: JWT Token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(minutes=DEFAULT_EXPIRE_MINUTES)

    to_encode.update({
        "exp": now + expires_delta,
        "iat": now
    })

    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, Any]]:
    """
    解码 JWT Token

    同时校验签名与过期时间

    Args:
        token: JWT Token
        secret_key: 签名密钥

    Returns:
        Optional[Dict[str, Any]]: 解码后的数据，如果失败返回 None
    """
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
