"""Paginación y partición temporal (pasados / próximos)"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")


def as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Normalizar a UTC. Un datetime naive se interpreta como UTC"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def page_offset(page: int, limit: int) -> int:
    """offset = limit * (page - 1); páginas menores a 1 cuentan como la 1"""
    return limit * (max(page, 1) - 1)


def partition_by_start(items: Iterable[T], now: datetime) -> Tuple[List[T], List[T]]:
    """
    Separar en (past, upcoming) comparando start_date contra un único `now`.

    Cada item cae exactamente en una lista y se conserva el orden de entrada.
    """
    now = as_utc(now)
    past: List[T] = []
    upcoming: List[T] = []
    for item in items:
        if as_utc(item.start_date) < now:
            past.append(item)
        else:
            upcoming.append(item)
    return past, upcoming
