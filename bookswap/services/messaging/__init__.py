from .message_service import CONVERSATIONS_TABLE, MESSAGES_TABLE, MessageService

__all__ = ["CONVERSATIONS_TABLE", "MESSAGES_TABLE", "MessageService"]
