from .user_service import PROFILES_TABLE, UserService

__all__ = ["PROFILES_TABLE", "UserService"]
