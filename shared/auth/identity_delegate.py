"""
Delegado de identidad: valida la credencial del request contra el servicio
de identidad externo y devuelve el principal (data.user).
"""
import hashlib
import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from shared.cache.redis_client import cache_get, cache_set
from shared.errors import Unauthorized, IdentityServiceUnavailable

logger = logging.getLogger(__name__)

USER_PROFILE_PATH = "/api/user-profile"


def get_principal_cache_key(credential: str) -> str:
    '''Clave de caché para una credencial (hash, nunca la credencial completa)'''
    credential_hash = hashlib.sha256(credential.encode()).hexdigest()
    return f"principal:{credential_hash[:16]}"


def is_success_flag(value: Any) -> bool:
    """El servicio devuelve success como booleano o como string "true"/"false" """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


class IdentityDelegate:
    """Cliente del servicio de identidad"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        cache_ttl: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cache_ttl = cache_ttl
        self._transport = transport

    @property
    def profile_url(self) -> str:
        return f"{self.base_url}{USER_PROFILE_PATH}"

    async def authenticate(self, credential: Optional[str]) -> Dict:
        """
        Resolver el principal para una credencial.

        Raises:
            Unauthorized: credencial ausente, rechazada o respuesta malformada
            IdentityServiceUnavailable: error de red/transporte
        """
        if not credential:
            raise Unauthorized()

        if self.cache_ttl > 0:
            cached = await self._get_cached(credential)
            if cached:
                return cached

        principal = await self._fetch_principal(credential)

        if self.cache_ttl > 0:
            await self._set_cached(credential, principal)

        return principal

    async def _fetch_principal(self, credential: str) -> Dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.profile_url,
                    json={},
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": credential,
                    },
                )
        except httpx.HTTPError as e:
            logger.error(f"Identity service unreachable ({self.profile_url}): {type(e).__name__}: {e}")
            raise IdentityServiceUnavailable() from e

        if response.status_code >= 400:
            logger.info(f"Identity service rejected credential: HTTP {response.status_code}")
            raise Unauthorized()

        try:
            body = response.json()
        except ValueError:
            logger.warning("Identity service returned a non-JSON body")
            raise Unauthorized()

        if not isinstance(body, dict) or not is_success_flag(body.get("success")):
            logger.info("Identity service answered success=false")
            raise Unauthorized()

        data = body.get("data")
        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(user, dict) or not user.get("user_id"):
            logger.warning("Identity service response is missing data.user.user_id")
            raise Unauthorized()

        return user

    async def _get_cached(self, credential: str) -> Optional[Dict]:
        try:
            cached = await cache_get(get_principal_cache_key(credential))
        except Exception as e:
            logger.warning(f"Principal cache read failed: {e}")
            return None
        return cached if isinstance(cached, dict) else None

    async def _set_cached(self, credential: str, principal: Dict):
        try:
            await cache_set(get_principal_cache_key(credential), principal, expire=self.cache_ttl)
        except Exception as e:
            logger.warning(f"Principal cache write failed: {e}")


_delegate: Optional[IdentityDelegate] = None


def get_identity_delegate() -> IdentityDelegate:
    """Dependency: instancia compartida configurada desde settings"""
    global _delegate
    if _delegate is None:
        _delegate = IdentityDelegate(
            base_url=settings.AUTH_BASE_URL,
            timeout=settings.AUTH_TIMEOUT_SECONDS,
            cache_ttl=settings.PRINCIPAL_CACHE_TTL_SECONDS,
        )
    return _delegate
