from __future__ import annotations

from datetime import datetime

from sqlmodel import SQLModel, Field


class StorageItem(SQLModel, table=True):
    """One key of the key-value store. `value` is JSON text."""

    key: str = Field(primary_key=True, index=True)
    value: str
    updated_at: datetime
