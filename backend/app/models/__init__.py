from app.models.message import Message
from app.models.service import Service
from app.models.user import User

__all__ = [
    "User",
    "Service",
    "Message",
]
