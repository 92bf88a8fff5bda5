"""Envelope JSON uniforme para todas las respuestas de la API"""
from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


def envelope(
    success: bool,
    message: Optional[str] = None,
    data: Any = None,
    error: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Construir respuesta {success, message?, data?, error?}

    Las claves con valor None se omiten, excepto success.
    """
    content = {"success": success}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = data
    if error is not None:
        content["error"] = error

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(content),
        headers=headers,
    )


def catch_all(status_code: int, error: str) -> JSONResponse:
    """Respuesta genérica para 404 / 500 no manejados"""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "status": False,
            "error": error,
            "help": "Please check the docs.",
        },
    )
