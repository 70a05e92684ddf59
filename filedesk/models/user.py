# -*- coding: utf-8 -*-
"""
用户相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    """注册请求模型

    字段均为可选，缺失或为空时由 AuthService 统一返回 400
    """
    fullname: Optional[str] = Field(None, description="姓名")
    nidn: Optional[str] = Field(None, description="教职工编号 (NIDN)")
    username: Optional[str] = Field(None, description="用户名")
    password: Optional[str] = Field(None, description="密码")


class SigninRequest(BaseModel):
    """登录请求模型"""
    username: Optional[str] = Field(None, description="用户名")
    password: Optional[str] = Field(None, description="密码")


class UserRecord(BaseModel):
    """用户表记录"""
    id: str
    fullname: str
    nidn: str
    username: str
    password: str  # bcrypt 哈希

    model_config = ConfigDict(from_attributes=True)
