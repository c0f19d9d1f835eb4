import time
import uuid
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.ext.asyncio import AsyncSession

from users_service.config import Settings
from users_service.database import Database, get_db
from users_service.errors import ConflictError, HttpError
from users_service.schemas import UserCreate, UserResponse
from users_service.service import UsersService

SERVICE_NAME = "users-service"

settings = Settings.from_env()

# Config logging JSON (niveaux INFO, WARNING, ERROR)
logger.remove()  # Supprime le handler par défaut
logger.add(
    sink=settings.log_file,
    format="{time:YYYY-MM-DDTHH:mm:ss.SSSZ} | {level} | {message} | {extra}",
    level=settings.log_level,
    serialize=True,  # Format JSON
    rotation="1 day",  # Rotation quotidienne
)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["service", "method", "endpoint"]
)
ERROR_COUNT = Counter(
    "http_errors_total",
    "Total HTTP errors",
    ["service", "endpoint", "error_type"]
)


async def log_requests(request: Request, call_next):
    # Generate or propagate correlation ID (trace-id)
    trace_id = request.headers.get("X-Trace-ID", str(uuid.uuid4()))
    start_time = time.time()

    # Bind trace_id to logger context
    with logger.contextualize(trace_id=trace_id, service=SERVICE_NAME):
        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={"method": request.method, "url": str(request.url), "trace_id": trace_id}
        )

        response = await call_next(request)

        latency = time.time() - start_time

        REQUEST_COUNT.labels(
            service=SERVICE_NAME,
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code
        ).inc()
        REQUEST_LATENCY.labels(
            service=SERVICE_NAME,
            method=request.method,
            endpoint=request.url.path
        ).observe(latency)

        logger.info(
            f"Response status: {response.status_code}",
            extra={"status": response.status_code, "latency": latency, "trace_id": trace_id}
        )

        # Add trace_id to response headers for tracing
        response.headers["X-Trace-ID"] = trace_id
        return response


async def handle_http_error(request: Request, exc: HttpError):
    error_type = "duplicate_email" if isinstance(exc, ConflictError) else "http_error"
    ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=request.url.path, error_type=error_type).inc()
    return JSONResponse(status_code=int(exc.status_code), content=exc.to_body())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Same shape as HttpError bodies, one message per failing field
    messages = [
        f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(f"Payload validation failed on {request.url.path}", extra={"errors": messages})
    ERROR_COUNT.labels(service=SERVICE_NAME, endpoint=request.url.path, error_type="validation_error").inc()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"statusCode": 400, "message": messages, "error": "Bad Request"},
    )


def get_users_service(db: AsyncSession = Depends(get_db)) -> UsersService:
    return UsersService(db)


router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/metrics")
async def metrics():
    """Endpoint /metrics compatible Prometheus"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get("/users", response_model=List[UserResponse])
async def get_users(service: UsersService = Depends(get_users_service)):
    logger.info("Fetching all users")
    return await service.find_all()


@router.get("/users/{user_id}", response_model=Optional[UserResponse])
async def get_user(user_id: int, service: UsersService = Depends(get_users_service)):
    logger.info(f"Fetching user {user_id}")
    user = await service.find_one(user_id)
    if user is None:
        logger.warning(f"User {user_id} not found")
    return user


@router.post("/users/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate, service: UsersService = Depends(get_users_service)):
    logger.info(f"Registering user: {user.email}")
    return await service.create(user)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the users API for the given settings (environment by default)."""
    app_settings = app_settings or settings
    db = Database(app_settings.database_url, echo=app_settings.db_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.create_all()
        logger.info("Database schema ready")
        yield
        await db.dispose()

    app = FastAPI(title="Users Service", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.db = db

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Trace-ID"],
    )
    # Middleware pour logger les requests avec correlation ID (observabilité)
    app.middleware("http")(log_requests)

    app.add_exception_handler(HttpError, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    logger.info(f"Starting Users Service on port {settings.port}")
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
