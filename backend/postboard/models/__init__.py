from postboard.models.post import PostRow
from postboard.models.user import UserRow

__all__ = ["PostRow", "UserRow"]
