from typing import Optional

from sqlmodel import Field, SQLModel


class Service(SQLModel, table=True):
    __tablename__ = "services"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(nullable=False)
    price: str = Field(nullable=False)  # free-text label, e.g. "Desde $5.99 Anual"
    summary: str = Field(nullable=False)
