"""Login accounts."""

from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """A user that can log in. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, nullable=False)  # exact, case-sensitive match on login
    password_hash: str = Field(nullable=False)
    name: str = Field(nullable=False)  # display name
