"""Contact form submissions."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import text
from sqlmodel import Field, SQLModel


class Message(SQLModel, table=True):
    """One contact form submission. Rows are never updated or deleted."""

    __tablename__ = "messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False)
    message: str = Field(nullable=False)
    topics: str = Field(default="", nullable=False)  # ", "-joined selections, see app.utils.topics
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
