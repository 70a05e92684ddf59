# -*- coding: utf-8 -*-
"""
用户存储服务

users 表的读写，所有 SQL 均由 SQLAlchemy Core 生成参数化查询
"""

import logging
from typing import Optional

from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from filedesk.core.database import Database, users
from filedesk.core.exceptions import (
    DuplicateUsernameError,
    StoreError,
    StoreUnavailableError
)
from filedesk.models.user import UserRecord


logger = logging.getLogger(__name__)


class UserService:
    """用户存储服务"""

    def __init__(self, db: Database):
        """
        初始化用户存储服务

        Args:
            db: 数据库实例
        """
        self.db = db

    def insert(self, user: UserRecord) -> None:
        """
        写入新用户

        Args:
            user: 用户记录，password 字段必须是哈希值

        Raises:
            DuplicateUsernameError: 用户名已存在
            StoreUnavailableError: 数据库不可用
            StoreError: 其他数据库错误
        """
        try:
            with self.db.begin() as conn:
                conn.execute(insert(users).values(**user.model_dump()))
        except IntegrityError as e:
            if "users.username" in str(e.orig):
                raise DuplicateUsernameError() from e
            raise StoreError() from e
        except OperationalError as e:
            raise StoreUnavailableError() from e
        except SQLAlchemyError as e:
            raise StoreError() from e

        logger.info(f"创建用户: {user.username} (ID: {user.id})")

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        """
        根据用户名获取用户

        Args:
            username: 用户名

        Returns:
            Optional[UserRecord]: 用户记录，不存在返回 None
        """
        try:
            with self.db.begin() as conn:
                row = conn.execute(
                    select(users).where(users.c.username == username)
                ).mappings().first()
        except OperationalError as e:
            raise StoreUnavailableError() from e
        except SQLAlchemyError as e:
            raise StoreError() from e

        if row is None:
            return None

        return UserRecord(**dict(row))

    def count(self) -> int:
        """用户总数"""
        try:
            with self.db.begin() as conn:
                return conn.execute(select(func.count()).select_from(users)).scalar_one()
        except SQLAlchemyError as e:
            raise StoreError() from e
