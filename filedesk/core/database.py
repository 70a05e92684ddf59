# -*- coding: utf-8 -*-
"""
数据库模块

包含数据库连接池、表结构定义和初始化
"""

import uuid
import logging
from typing import Optional
from contextlib import contextmanager

from sqlalchemy import Column, MetaData, String, Table, create_engine
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError
from sqlalchemy.pool import QueuePool

from .config import Settings
from .exceptions import StoreUnavailableError


logger = logging.getLogger(__name__)


metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),
    Column("fullname", String, nullable=False),
    Column("nidn", String, nullable=False),
    Column("username", String, unique=True, nullable=False),
    Column("password", String, nullable=False),
)


class Database:
    """数据库连接池管理"""

    def __init__(
        self,
        db_path: str,
        pool_size: int = 10,
        pool_timeout: Optional[float] = None
    ):
        """
        初始化数据库连接池

        连接按需创建，最多 pool_size 个；超出后请求排队等待空闲连接

        Args:
            db_path: 数据库文件路径，":memory:" 表示共享内存数据库
            pool_size: 最大连接数
            pool_timeout: 等待空闲连接的超时时间（秒），None 表示无限等待
        """
        self.db_path = db_path
        self.pool_size = pool_size
        self.pool_timeout = pool_timeout
        self._closed = False

        # 内存数据库需要共享缓存，保证池中所有连接看到同一份数据
        if db_path == ":memory:":
            url = f"sqlite:///file:filedesk-{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"
        else:
            url = f"sqlite:///{db_path}"

        self.engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=pool_timeout,
            connect_args={"check_same_thread": False}
        )

    @property
    def size(self) -> int:
        """已创建的连接数"""
        pool = self.engine.pool
        return pool.checkedin() + pool.checkedout()

    def acquire(self) -> Connection:
        """
        从连接池获取连接

        Returns:
            Connection: 数据库连接

        Raises:
            StoreUnavailableError: 连接池已关闭、连接失败或等待超时
        """
        if self._closed:
            raise StoreUnavailableError()

        try:
            return self.engine.connect()
        except PoolTimeoutError as e:
            logger.warning(f"等待数据库连接超时 ({self.pool_timeout}s)")
            raise StoreUnavailableError() from e
        except DBAPIError as e:
            logger.error(f"数据库连接失败: {e}")
            raise StoreUnavailableError() from e

    def release(self, conn: Connection):
        """归还连接"""
        conn.close()

    def close(self):
        """关闭所有连接"""
        self._closed = True
        self.engine.dispose()

    @contextmanager
    def begin(self):
        """
        获取事务内连接的上下文管理器

        正常退出时提交事务，异常时回滚并继续抛出

        用法:
            with db.begin() as conn:
                conn.execute(select(users))
        """
        conn = self.acquire()
        try:
            with conn.begin():
                yield conn
        except Exception as e:
            logger.error(f"数据库操作失败: {e}")
            raise
        finally:
            self.release(conn)


def get_database(settings: Settings) -> Database:
    """
    根据配置创建数据库实例

    Args:
        settings: 应用配置

    Returns:
        Database: 数据库实例
    """
    db_url = settings.DATABASE_URL

    if db_url.startswith("sqlite:///"):
        db_path = db_url.replace("sqlite:///", "", 1)
        return Database(
            db_path,
            pool_size=settings.DB_POOL_SIZE,
            pool_timeout=settings.DB_POOL_TIMEOUT
        )

    raise ValueError(f"不支持的数据库类型: {db_url}")


def init_database(db: Database):
    """
    初始化数据库表结构

    Args:
        db: 数据库实例
    """
    with db.begin() as conn:
        metadata.create_all(conn)

    logger.info("数据库表结构初始化完成")
