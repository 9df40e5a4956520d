"""Post schemas."""

from pydantic import BaseModel, ConfigDict

from blog_api.models.post import Post


class PostInput(BaseModel):
    """Create or update a post.

    ``image_url`` may be None or the literal string "undefined" when the
    client has no image to attach.
    """

    title: str
    content: str
    image_url: str | None = None


class PostPage(BaseModel):
    """One page of posts plus the overall post count."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    posts: list[Post]
    total_posts: int
