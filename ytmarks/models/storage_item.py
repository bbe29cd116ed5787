from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


class StorageItem(SQLModel, table=True):
    __tablename__ = "storage_item"

    key: str = Field(primary_key=True, max_length=255)
    # JSON-encoded value
    value: str
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
