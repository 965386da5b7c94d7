from pagetrail.models.library import ReadingSession, UserBook
from pagetrail.models.user import AuthSession, User

__all__ = ["AuthSession", "ReadingSession", "User", "UserBook"]
