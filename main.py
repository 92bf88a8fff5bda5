"""API Gateway principal - Punto de entrada de la aplicación"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from contextlib import asynccontextmanager

from app.core.config import settings
from shared.database.connection import init_db, close_db
from shared.cache.redis_client import init_redis, close_redis
from shared.errors import AppError, IdentityServiceUnavailable
from shared.utils.rate_limiter import limiter, rate_limit_exceeded_handler
from shared.utils.responses import envelope, catch_all

# Configurar logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events de la aplicación"""
    # Startup
    logger.info("Iniciando aplicación...")
    await init_db()
    if settings.PRINCIPAL_CACHE_TTL_SECONDS > 0:
        await init_redis()
    logger.info("Aplicación iniciada")
    yield
    # Shutdown
    logger.info("Cerrando aplicación...")
    await close_db()
    await close_redis()
    logger.info("Aplicación cerrada")


app = FastAPI(
    title="Events API",
    description="API de eventos con precios y galería, autenticación delegada",
    version="1.0.0",
    lifespan=lifespan
)

# En desarrollo, permitir todos los orígenes para facilitar testing
if settings.APP_ENV == "development":
    allow_origins = ["*"]
    allow_credentials = False  # No se puede usar credentials con allow_origins=["*"]
else:
    allow_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]
    allow_credentials = True
    logger.info(f"CORS origins configurados: {allow_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Errores de dominio -> envelope con success=false"""
    if isinstance(exc, IdentityServiceUnavailable):
        logger.error(f"Auth rejected (identity service unavailable): {request.method} {request.url.path}")
    elif exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return envelope(
        success=False,
        message=exc.message,
        error=exc.error_code,
        status_code=exc.status_code,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Payload o query inválido (campos requeridos ausentes, tipos incorrectos)"""
    return envelope(
        success=False,
        message="Validation error",
        data={"errors": exc.errors()},
        error="validation_error",
        status_code=422,
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return catch_all(404, "Page not found or has been deleted.")
    return envelope(success=False, message=str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return catch_all(500, "Something broken! Please contact support.")


# Incluir routers de cada servicio
from services.event_management.routes.events import router as events_router
from services.attendees.routes.attendees import router as attendees_router

app.include_router(events_router, tags=["events"])
app.include_router(attendees_router, tags=["attendees"])


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "ok", "service": "events-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.APP_DEBUG
    )
