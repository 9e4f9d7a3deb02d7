# FastAPI 진입점
# - Beanie ODM 초기화 (MongoDB)
# - 서버 측 세션 미들웨어, 정적 파일(/static, /uploads)
# - 라우터 등록, 도메인 예외 -> 알림(flash)/리다이렉트/에러 페이지 매핑

import logging
import os
from datetime import datetime

from beanie import init_beanie
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from motor.motor_asyncio import AsyncIOMotorClient

from .api.stores import router as api_router
from .core.config import PACKAGE_ROOT, settings
from .core.exceptions import (
    AccountNotFound,
    AuthenticationError,
    FormValidationError,
    InvalidResetToken,
    LoginRequired,
    NotStoreOwnerError,
    StoreNotFoundError,
)
from .core.session import SessionMiddleware
from .core.templating import redirect, redirect_back, render
from .models.review import Review
from .models.session import SessionRecord
from .models.store import Store
from .models.user import User
from .web.auth import router as auth_router
from .web.reviews import router as reviews_router
from .web.stores import router as stores_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DOCUMENT_MODELS = [User, Store, Review, SessionRecord]

# FastAPI 애플리케이션 인스턴스 생성
app = FastAPI(
    title="Storefinder",
    description="동네 가게 디렉토리: 스토어 등록, 리뷰, 태그, 지도 검색",
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
app.add_middleware(SessionMiddleware)

os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(PACKAGE_ROOT / "static")), name="static")
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")


# Beanie 초기화 (앱 시작 시 1회)
@app.on_event("startup")
async def app_init():
    try:
        client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=5000)
        await client.admin.command('ping')
        db = client.get_default_database()
        await init_beanie(database=db, document_models=DOCUMENT_MODELS)
        logger.info(f"[Startup] MongoDB 연결 성공: {settings.MONGODB_URI}")
    except Exception as e:
        # MongoDB 연결 실패 시에도 서버는 시작됩니다 (/health는 계속 응답)
        logger.warning(f"[Startup] MongoDB 연결 실패: {e}")
        logger.info(f"[Startup] MongoDB URI를 확인하세요: {settings.MONGODB_URI}")


# ---- 예외 핸들러 ----

def wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api/") or "application/json" in request.headers.get("accept", "")


def flash(request: Request, category: str, message) -> None:
    session = getattr(request.state, "session", None)
    if session is not None:
        session.flash(category, message)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    if wants_json(request):
        return JSONResponse({"detail": exc.message}, status_code=401)
    flash(request, "error", exc.message)
    return redirect("/login")


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    flash(request, "error", exc.message)
    return redirect("/login")


@app.exception_handler(AccountNotFound)
@app.exception_handler(InvalidResetToken)
async def account_notice_handler(request: Request, exc):
    flash(request, "error", exc.message)
    return redirect("/login")


@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError):
    if wants_json(request):
        return JSONResponse({"detail": exc.messages}, status_code=422)
    for message in exc.messages:
        flash(request, "error", message)
    return redirect_back(request)


@app.exception_handler(NotStoreOwnerError)
async def not_owner_handler(request: Request, exc: NotStoreOwnerError):
    logger.warning(f"[Auth] 소유자가 아닌 사용자의 수정 시도: {request.url.path}")
    if wants_json(request):
        return JSONResponse({"detail": exc.message}, status_code=403)
    return render(request, "error.html", title="Forbidden", message=exc.message, status_code=403)


@app.exception_handler(StoreNotFoundError)
async def store_not_found_handler(request: Request, exc: StoreNotFoundError):
    if wants_json(request):
        return JSONResponse({"detail": "Store not found"}, status_code=404)
    return render(request, "error.html", title="Not Found", message="That store doesn't exist!", status_code=404)


# 간단한 헬스체크
@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME, "time": datetime.utcnow().isoformat()}


app.include_router(auth_router)
app.include_router(reviews_router)
app.include_router(stores_router)
app.include_router(api_router, prefix="/api")
