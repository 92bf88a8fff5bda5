"""
Rate limiting usando slowapi.
El storage es configurable (memory:// por defecto, redis://... en despliegues
con varias instancias).
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, Response
import hashlib
import logging

from app.core.config import settings
from shared.utils.responses import envelope

logger = logging.getLogger(__name__)


def get_real_client_ip(request: Request) -> str:
    """
    Obtener IP real del cliente considerando proxies/load balancers.
    """
    # X-Forwarded-For puede tener múltiples IPs: client, proxy1, proxy2
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


def get_client_identifier(request: Request) -> str:
    """
    Identificador para rate limiting: IP + hash de la credencial si viene.
    """
    ip = get_real_client_ip(request)

    auth_header = request.headers.get("Authorization", "")
    if auth_header:
        # Hash para no exponer la credencial
        token_hash = hashlib.md5(auth_header.encode()).hexdigest()[:8]
        return f"{ip}:{token_hash}"

    return ip


limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    headers_enabled=False,
)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handler para rate limit exceeded con el envelope estándar"""
    logger.warning(
        f"Rate limit exceeded - IP: {get_real_client_ip(request)}, "
        f"Path: {request.url.path}, Limit: {exc.detail}"
    )

    return envelope(
        success=False,
        message="Too many requests. Please wait before trying again.",
        error="rate_limit_exceeded",
        status_code=429,
        headers={"Retry-After": "60"},
    )


# Límites por tipo de endpoint
RATE_LIMITS = {
    # Endpoints sin autenticación
    "public": "60/minute",
}
