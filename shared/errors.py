"""Errores de aplicación y su mapeo a status HTTP"""
from typing import Optional


class AppError(Exception):
    """Error base. El gateway lo convierte en un envelope JSON con success=false"""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, status_code: Optional[int] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code


class Unauthorized(AppError):
    """Credencial ausente o rechazada por el servicio de identidad"""
    status_code = 401
    error_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized", **kwargs):
        super().__init__(message, **kwargs)


class IdentityServiceUnavailable(Unauthorized):
    """Fallo de transporte hablando con el servicio de identidad.

    Para el cliente es el mismo 401 que Unauthorized; solo cambia error_code
    y el nivel de log.
    """
    error_code = "identity_service_unavailable"


class NotFound(AppError):
    status_code = 404
    error_code = "not_found"


class ValidationGap(AppError):
    """Campo requerido ausente o inválido en el payload"""
    status_code = 422
    error_code = "validation_error"


class StoreFailure(AppError):
    """La llamada al data store lanzó una excepción"""
    status_code = 500
    error_code = "store_failure"

    def __init__(self, message: str, operation: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
