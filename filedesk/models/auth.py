# -*- coding: utf-8 -*-
"""
认证相关数据模型
"""

from typing import Optional
from pydantic import BaseModel


class TokenData(BaseModel):
    """Token 数据模型"""
    id: str
    username: str
    exp: Optional[int] = None


class SigninResponse(BaseModel):
    """登录响应模型"""
    message: str
    token: str


class MessageResponse(BaseModel):
    """通用消息响应"""
    message: str
