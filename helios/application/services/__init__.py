"""Service orchestrators."""

from .chat_service import ChatExchange, ChatService, ExchangeState, drain_running_exchanges
from .fragment_channel import FragmentChannel
from .session_service import SessionService
from .title_service import TitleSynthesizer

__all__ = [
    "ChatExchange",
    "ChatService",
    "ExchangeState",
    "FragmentChannel",
    "SessionService",
    "TitleSynthesizer",
    "drain_running_exchanges",
]
