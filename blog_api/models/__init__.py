"""SQLAlchemy models."""

from blog_api.models.post import Post, user_posts
from blog_api.models.user import User

__all__ = [
    "User",
    "Post",
    "user_posts",
]
