# -*- coding: utf-8 -*-
"""
FileDesk 主应用入口

FastAPI 应用初始化、异常处理和路由注册
"""

import time
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filedesk.core.config import Settings, get_settings
from filedesk.core.database import get_database, init_database
from filedesk.core.exceptions import FileDeskError
from filedesk.core.security import build_password_context
from filedesk.services.file_service import FileService


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    """配置日志"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        settings: 应用配置，默认使用全局配置

    Returns:
        FastAPI: 应用实例
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.DESCRIPTION,
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs" if not settings.TESTING else None,
        redoc_url="/redoc" if not settings.TESTING else None,
    )
    app.state.settings = settings

    # =========================================================================
    # CORS 中间件
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # 路由注册
    # =========================================================================

    from filedesk.api import auth, files

    app.include_router(auth.router)
    app.include_router(files.router)

    register_exception_handlers(app)

    # =========================================================================
    # 请求日志中间件
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """记录请求"""
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.1f}ms)"
        )
        return response

    # =========================================================================
    # 根路径和健康检查
    # =========================================================================

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """存活检查"""
        return "API is running"

    @app.get("/health")
    async def health_check():
        """健康检查端点"""
        return {"status": "healthy"}

    return app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期

    启动时创建连接池、初始化表结构和存储目录，关闭时释放连接池
    """
    settings: Settings = app.state.settings

    if settings.uses_default_secret and not settings.TESTING:
        logger.warning("正在使用默认 SECRET_KEY，生产环境请设置 FILEDESK_SECRET_KEY")

    db = get_database(settings)
    init_database(db)

    app.state.db = db
    app.state.pwd_context = build_password_context(settings.BCRYPT_ROUNDS)
    app.state.file_service = FileService(
        settings.STORAGE_DIR,
        max_upload_size=settings.MAX_UPLOAD_SIZE,
        overwrite=settings.UPLOAD_OVERWRITE,
        sanitize_filenames=settings.UPLOAD_SANITIZE_FILENAMES,
    )

    logger.info(
        f"{settings.PROJECT_NAME} v{settings.VERSION} 启动成功 "
        f"(存储目录: {app.state.file_service.root})"
    )

    try:
        yield
    finally:
        db.close()
        logger.info(f"{settings.PROJECT_NAME} 已关闭")


def register_exception_handlers(app: FastAPI):
    """
    注册异常处理器

    所有错误响应都是带 message 字段的 JSON 对象
    """

    @app.exception_handler(FileDeskError)
    async def handle_filedesk_error(request: Request, exc: FileDeskError):
        if exc.status_code >= 500:
            logger.error(
                f"{request.method} {request.url.path} 失败: {exc.message} ({exc.__cause__!r})"
            )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Endpoint not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()))
            message = f"Invalid request: {location}: {first.get('msg')}"
        else:
            message = "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} 未处理的异常")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


# 创建 FastAPI 应用
app = create_app()
