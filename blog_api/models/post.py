"""Post model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from blog_api.database import Base
from blog_api.models.mixins import TimestampMixin

# Links a user to the posts in their post list. Kept apart from
# Post.creator_id: the post row and the link row are written separately.
user_posts = Table(
    "user_posts",
    Base.metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("post_id", Integer, ForeignKey("posts.id"), nullable=False),
)


class Post(Base, TimestampMixin):
    """Blog post written by exactly one user."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)  # "images/<file>" or None
    creator_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    creator = relationship("User")
