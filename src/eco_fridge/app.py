"""FastAPI 앱 팩토리"""
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from eco_fridge.core.config import settings
from eco_fridge.core.database import init_db
from eco_fridge.core.logging import logger
from eco_fridge.api import ai_router, health_router, item_router
from eco_fridge.api.dependencies import close_cache_storage

# 앱 셸 정적 자산 (오프라인 프리캐시 대상)
PUBLIC_DIR = Path(__file__).resolve().parents[2] / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기"""
    logger.info("Starting application...")
    init_db()
    logger.info(f"Application started (offline cache '{settings.offline_cache_version}')")
    yield
    logger.info("Shutting down application...")
    await close_cache_storage()


def create_app() -> FastAPI:
    """
    FastAPI 앱 생성 (Factory Pattern)

    Returns:
        FastAPI 앱 인스턴스
    """
    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 라우터 등록
    app.include_router(health_router)
    app.include_router(item_router)
    app.include_router(ai_router)

    # 앱 셸은 마지막에 마운트 (API 경로가 우선)
    if PUBLIC_DIR.is_dir():
        app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="shell")
    else:
        logger.warning(f"Shell assets directory not found: {PUBLIC_DIR}")

    return app


# 앱 인스턴스 생성 (uvicorn이 로드할 수 있도록)
app = create_app()
