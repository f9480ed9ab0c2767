from __future__ import annotations

from functools import partial
from typing import Callable, Generator

from fastapi import Depends

from backend.app.core.config import Settings, get_settings
from backend.app.db.session import SessionLocal
from backend.services.email_sender import send_email


def get_db() -> Generator:
    # close() sans commit => rollback de tout ce qui a été flush
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_email_sender(settings: Settings = Depends(get_settings)) -> Callable[[str, str, str], bool]:
    return partial(send_email, settings=settings)
