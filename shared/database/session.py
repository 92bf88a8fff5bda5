"""Sesiones de base de datos"""
from sqlalchemy.ext.asyncio import async_sessionmaker

from shared.database.connection import get_session_maker


def get_session_factory() -> async_sessionmaker:
    """Dependency: session factory para los store adapters"""
    return get_session_maker()


__all__ = ["get_session_factory"]
