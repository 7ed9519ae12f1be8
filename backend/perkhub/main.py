# FastAPI 진입점
# - Beanie ODM 초기화 (MongoDB)
# - 라우터 라우팅
# - CORS 설정
# - 도메인 예외 → JSON 에러 응답 변환

import logging
from typing import Tuple
from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, PyMongoError
from beanie import init_beanie

from .core.config import settings
from .core.exceptions import AppError, DatabaseUnavailableError, UnauthenticatedError, ValidationError
from .core.logging_config import configure_logging
from .core.retry import create_db_retry_decorator
from .models.user import User
from .models.perk import Perk
from .api.v1.auth import router as auth_router
from .api.v1.perks import router as perks_router

logger = logging.getLogger(__name__)

# FastAPI 애플리케이션 인스턴스 생성
app = FastAPI(
    title="PerkHub API",
    description="회원 인증 + 가맹점 혜택 디렉토리",
    version="1.0.0"
)

# CORS 허용 도메인 세팅
origins = [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def open_client() -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    # URI 형식 오류나 DB 이름 누락은 재시도해도 소용없으므로 여기서 바로 실패
    try:
        client = AsyncIOMotorClient(
            settings.MONGODB_URI,
            serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        )
    except ConfigurationError as e:
        raise DatabaseUnavailableError(str(e), uri=settings.MONGODB_URI) from e
    try:
        db = client.get_default_database()
    except ConfigurationError as e:
        client.close()
        raise DatabaseUnavailableError(str(e), uri=settings.MONGODB_URI) from e
    return client, db


@create_db_retry_decorator(max_attempts=settings.MONGODB_CONNECT_ATTEMPTS)
async def ping_database(client: AsyncIOMotorClient) -> None:
    # 주니어 개발자님께: serverSelectionTimeoutMS 안에 연결하지 못하면 ping이 실패하고,
    # 재시도 데코레이터가 잠시 기다렸다가 다시 시도합니다.
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        raise DatabaseUnavailableError(str(e), uri=settings.MONGODB_URI) from e


async def connect_database() -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    client, db = open_client()
    try:
        await ping_database(client)
    except DatabaseUnavailableError:
        client.close()
        raise
    return client, db


# Beanie 초기화 (앱 시작 시 1회)
@app.on_event("startup")
async def app_init():
    configure_logging(settings.LOG_LEVEL)
    try:
        client, db = await connect_database()
    except DatabaseUnavailableError as e:
        # 연결 실패해도 서버는 시작됨 (헬스체크는 응답). 인증/혜택 API는 사용할 수 없음.
        logger.warning("MongoDB 연결 실패: %s", e.message)
        logger.info("MongoDB URI를 확인하세요: %s", settings.MONGODB_URI)
        return
    # unique 이메일 인덱스도 여기서 생성됨
    await init_beanie(database=db, document_models=[User, Perk])
    app.state.mongo_client = client
    logger.info("MongoDB 연결 성공: %s", settings.MONGODB_URI)


@app.on_event("shutdown")
async def app_shutdown():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()


# ---- 예외 → 응답 ----

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    error = ValidationError("Request body is invalid", details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_body())


# 간단한 헬스체크
@app.get("/")
async def root():
    return {"ok": True, "app": settings.APP_NAME, "time": datetime.now(timezone.utc).isoformat()}

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME, "version": "1.0.0"}

# API v1 라우터 등록
app.include_router(auth_router, prefix="/api/v1")
app.include_router(perks_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("perkhub.main:app", host=settings.HOST, port=settings.PORT)
