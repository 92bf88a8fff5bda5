"""Dependencies de autenticación para FastAPI"""
from fastapi import Depends, Request
from typing import Dict, Optional
import logging

from shared.auth.identity_delegate import IdentityDelegate, get_identity_delegate

logger = logging.getLogger(__name__)


def extract_credential(request: Request) -> Optional[str]:
    '''
    Credencial tal cual llega en el header Authorization.

    Variante servicio-a-servicio: sin Authorization pero con X-API-Key y
    X-API-Secret, la credencial es "<key>:<secret>".
    '''
    authorization = request.headers.get("Authorization")
    if authorization:
        return authorization

    api_key = request.headers.get("X-API-Key")
    api_secret = request.headers.get("X-API-Secret")
    if api_key and api_secret:
        return f"{api_key}:{api_secret}"

    return None


async def get_current_user(
    request: Request,
    delegate: IdentityDelegate = Depends(get_identity_delegate),
) -> Dict:
    '''Obtener principal del request delegando en el servicio de identidad'''
    principal = await delegate.authenticate(extract_credential(request))
    request.state.user = principal
    logger.debug(f"Authenticated user_id={principal.get('user_id')} for {request.url.path}")
    return principal
