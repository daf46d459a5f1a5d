#!/usr/bin/env python3
"""
词汇掌握与评估引擎 - FastAPI 主应用入口
Description: 提供词汇进度、学习路径、测评和教育目标的REST API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from vocab_mastery.config.settings import settings
from vocab_mastery.utils.logger import setup_logging
from vocab_mastery.utils.database import init_db, check_db_connection
from vocab_mastery.utils.exceptions import EngineError, NotFoundError, ValidationError
from vocab_mastery.utils.helpers import format_timestamp, utc_now
from vocab_mastery.services.educational_service import StaticData
from vocab_mastery.api.assessment_manager import assessment_manager

# 设置日志
setup_logging()
logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}}
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理
    - 启动时初始化数据库和静态数据
    - 关闭时清理进行中的测评
    """
    logger.info("初始化词汇引擎应用...")

    try:
        init_db()
        StaticData.load()
        logger.info("词汇引擎应用启动完成")
    except Exception as e:
        logger.error(f"应用启动失败: {e}")
        raise

    yield  # 应用运行期间

    logger.info("正在关闭词汇引擎应用...")
    assessment_manager.clear()
    StaticData.reset()
    logger.info("词汇引擎应用已安全关闭")


def create_application() -> FastAPI:
    """创建并配置FastAPI应用实例"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="词汇掌握跟踪、学习路径、测评与教育目标管理",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 全局异常处理
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return error_response(404, exc.code, exc.message)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return error_response(400, exc.code, exc.message)

    @app.exception_handler(EngineError)
    async def engine_error_handler(request: Request, exc: EngineError):
        logger.error(f"引擎错误: {exc}")
        return error_response(500, exc.code, exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return error_response(exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"未处理的异常: {exc}", exc_info=True)
        return error_response(500, "internal_error", "内部服务器错误")

    return app


# 创建应用实例
app = create_application()

from vocab_mastery.api.routes import vocabulary, assessments, goals  # noqa: E402

# 注册API路由
app.include_router(vocabulary.router, prefix="/api/v1/vocabulary", tags=["词汇进度"])
app.include_router(assessments.router, prefix="/api/v1/assessments", tags=["测评"])
app.include_router(goals.router, prefix="/api/v1/goals", tags=["教育目标"])


@app.get("/")
async def root():
    """根端点 - 服务状态检查"""
    return {
        "status": "running",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": format_timestamp(utc_now())
    }


@app.get("/health")
async def health_check():
    """健康检查端点"""
    db_status = check_db_connection()
    return {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
        "active_assessments": len(assessment_manager.active_assessments),
        "timestamp": format_timestamp(utc_now())
    }


if __name__ == "__main__":
    """开发环境直接运行"""
    uvicorn.run(
        "vocab_mastery.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
