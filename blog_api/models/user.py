"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from blog_api.database import Base
from blog_api.models.mixins import TimestampMixin

DEFAULT_STATUS = "I am new!"


class User(Base, TimestampMixin):
    """User model for authentication and post ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    status = Column(String(255), nullable=False, default=DEFAULT_STATUS)

    # Owned posts, in the order they were linked to the user
    posts = relationship("Post", secondary="user_posts", order_by="user_posts.c.id")
