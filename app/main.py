from contextlib import asynccontextmanager
import os
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.logger import Logger
logger = Logger.get_logger()
# ========================
# ✅ .env スイッチング処理
# ========================
env = os.getenv("ENV", "development")
env_file = f".env.{env}"
load_dotenv(dotenv_path=env_file)
logger.info(f" Loaded FastAPI ENV: {env_file}")

from app.core.config import settings
from app.constants.messages import CommonMessage
from app.db.base import get_database
from app.middlewares.request_id import RequestIdMiddleware
from app.routers import api_router
from app.services.s3.client import s3_client

# ========================
# ✅ AWSクライアント初期化
# ========================
@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- startup ---
    get_database()
    s3_client()
    logger.info("AWS clients initialized")

    yield

app = FastAPI(title=settings.SERVICE_NAME, lifespan=lifespan)

# ========================
# CORS
# ========================
origins = settings.cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,  # allow_credentials=True の場合 * は不可
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========================
# リクエストID
# ========================
app.add_middleware(RequestIdMiddleware)


# ========================
# バリデーションエラーは400で返す
# ========================
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": CommonMessage.INVALID_REQUEST, "errors": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]


@app.get("/healthz")
def healthz():
    return {"ok": True}

# ルータ
app.include_router(api_router)
