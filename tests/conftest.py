# -*- coding: utf-8 -*-
"""
pytest 配置文件

定义全局 fixtures 和测试配置
"""

import sys
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

# 将项目根目录添加到 Python 路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from filedesk.core.config import Settings
from filedesk.core.database import Database, init_database
from filedesk.core.security import build_password_context
from filedesk.main import create_app
from filedesk.services.file_service import FileService


TEST_SECRET_KEY = "test-secret-key-for-testing-only"


# =============================================================================
# 环境变量 fixtures
# =============================================================================

@pytest.fixture(scope="function", autouse=True)
def set_test_env(monkeypatch):
    """
    自动设置测试环境变量

    autouse=True 表示所有测试自动使用此 fixture
    """
    monkeypatch.setenv("FILEDESK_TESTING", "true")
    monkeypatch.setenv("FILEDESK_SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("FILEDESK_DATABASE_URL", "sqlite:///:memory:")


# =============================================================================
# 临时目录 fixtures
# =============================================================================

@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """
    创建临时目录，测试后自动清理

    用法:
        def test_something(temp_dir: Path):
            file_path = temp_dir / "test.txt"
            file_path.write_text("content")
    """
    temp_path = Path(tempfile.mkdtemp(prefix="filedesk_test_"))
    yield temp_path
    # 清理临时目录
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture(scope="function")
def storage_root(temp_dir: Path) -> Path:
    """存储根目录（由服务在启动时创建）"""
    return temp_dir / "uploads"


# =============================================================================
# 配置 / 数据库 / 服务 fixtures
# =============================================================================

@pytest.fixture(scope="function")
def test_settings(temp_dir: Path, storage_root: Path) -> Settings:
    """每个测试独立的配置：临时数据库文件、临时存储目录、低成本 bcrypt"""
    return Settings(
        FILEDESK_SECRET_KEY=TEST_SECRET_KEY,
        FILEDESK_DATABASE_URL=f"sqlite:///{temp_dir / 'filedesk.db'}",
        FILEDESK_STORAGE_DIR=str(storage_root),
        FILEDESK_BCRYPT_ROUNDS=4,
        FILEDESK_TESTING=True,
    )


@pytest.fixture(scope="function")
def test_database() -> Generator[Database, None, None]:
    """
    提供完整的 Database 对象

    返回初始化好的内存 Database 对象，用于服务测试
    """
    db = Database(":memory:")
    init_database(db)

    yield db

    db.close()


@pytest.fixture(scope="function")
def fast_pwd_context():
    """低成本的密码哈希上下文，加快测试"""
    return build_password_context(rounds=4)


@pytest.fixture(scope="function")
def file_service(storage_root: Path) -> FileService:
    return FileService(str(storage_root))


# =============================================================================
# FastAPI 测试客户端 fixtures
# =============================================================================

@pytest.fixture(scope="function")
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """
    HTTP 测试客户端

    使用 with 语句以触发应用的启动和关闭流程
    """
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def user_payload() -> Dict[str, str]:
    return {
        "fullname": "Siti Rahma",
        "nidn": "0012345678",
        "username": "siti",
        "password": "rahasia123",
    }


@pytest.fixture(scope="function")
def registered_user(client: TestClient, user_payload: Dict[str, str]) -> Dict[str, str]:
    """通过 API 注册的用户"""
    response = client.post("/signup", json=user_payload)
    assert response.status_code == 201
    return user_payload


@pytest.fixture(scope="function")
def auth_token(client: TestClient, registered_user: Dict[str, str]) -> str:
    response = client.post(
        "/signin",
        json={
            "username": registered_user["username"],
            "password": registered_user["password"],
        },
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture(scope="function")
def auth_headers(auth_token: str) -> Dict[str, str]:
    """生成认证头"""
    return {"Authorization": f"Bearer {auth_token}"}
