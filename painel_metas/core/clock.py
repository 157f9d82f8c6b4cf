"""Data de referência ("hoje") sempre no fuso configurado."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from painel_metas.core.config import settings


def now(tz_name: Optional[str] = None) -> datetime:
    return datetime.now(tz=ZoneInfo(tz_name or settings.TIMEZONE))


def today(tz_name: Optional[str] = None) -> date:
    """Data de calendário atual em ``tz_name`` (default: ``settings.TIMEZONE``)."""
    return now(tz_name).date()
