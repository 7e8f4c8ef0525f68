# alumniconnect/routers/__init__.py
from . import user_router
from . import mentorship_router
from . import conversation_router
from . import message_router

__all__ = [
    "user_router",
    "mentorship_router",
    "conversation_router",
    "message_router"
]
