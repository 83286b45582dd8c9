import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from core.config import settings
from core.errors import EduPayError
from core.logging import configure_logging, mask_key
from routes.admin import router as admin_router
from routes.auth import router as auth_router
from routes.payments import router as payments_router
from routes.students import router as students_router
from schemas.payment import HealthOut
from services.midtrans import environment_name

configure_logging()
logger = logging.getLogger("edupay")


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Keys may be absent; the payment route reports that per request
    logger.info(
        "Gateway configuration loaded",
        extra={
            "server_key": mask_key(settings.MIDTRANS_SERVER_KEY),
            "client_key": mask_key(settings.MIDTRANS_CLIENT_KEY),
            "merchant_id": settings.MIDTRANS_MERCHANT_ID,
            "environment": environment_name(),
        },
    )
    if settings.DATA_BACKEND == "sql":
        # Ensure tables exist (for dev/test; in prod use migrations)
        import models  # noqa: F401
        from core.db import Base, engine

        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(EduPayError)
async def edupay_error_handler(request: Request, exc: EduPayError):
    return JSONResponse(status_code=500, content=exc.to_dict())


app.include_router(payments_router)
app.include_router(auth_router)
app.include_router(students_router)
app.include_router(admin_router)


@app.get("/api/health", response_model=HealthOut)
async def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "environment": environment_name(),
        "service": settings.APP_NAME,
    }


@app.get("/api", response_class=PlainTextResponse)
async def index():
    return "EduPay API Running"


if __name__ == "__main__":
    import os
    import uvicorn

    port = int(os.getenv("PORT", 3001))

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=settings.DEBUG,
    )
