"""Post change notifications over Redis pub/sub."""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import redis
import redis.asyncio as aioredis

from blog_api.models.post import Post

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)

POSTS_CHANNEL = "posts"


class PostAction(StrEnum):
    """What happened to a post."""

    CREATE = "create"
    UPDATE = "update"


def post_payload(post: Post) -> dict[str, Any]:
    """JSON-ready view of a post, shaped like the GraphQL Post type."""
    creator = post.creator
    return {
        "_id": str(post.id),
        "title": post.title,
        "content": post.content,
        "imageUrl": post.image_url,
        "creator": {"_id": str(creator.id), "name": creator.name} if creator else None,
        "createdAt": post.created_at.isoformat() if post.created_at else None,
        "updatedAt": post.updated_at.isoformat() if post.updated_at else None,
    }


class PostNotifier:
    """Best-effort broadcaster of post events.

    Created once per application (see the lifespan in ``blog_api.main``) and
    handed to whatever needs to publish or listen.
    """

    def __init__(self, redis_url: str, channel: str = POSTS_CHANNEL):
        self.redis_url = redis_url
        self.channel = channel
        self._redis: redis.Redis | None = None

    @property
    def client(self) -> redis.Redis:
        """Synchronous client used for publishing from resolvers."""
        if self._redis is None:
            self._redis = redis.from_url(self.redis_url)
        return self._redis

    def publish(self, action: PostAction, post: Post) -> None:
        """Publish a post event; never raises."""
        try:
            message = {
                "action": action,
                "post": post_payload(post),
                "timestamp": datetime.now(UTC).isoformat(),
            }
            self.client.publish(self.channel, json.dumps(message))
            logger.debug(f"Published {action} for post {post.id} to {self.channel}")
        except Exception as e:
            # Don't fail the request if pub/sub fails
            logger.error(f"Failed to publish post event: {e}")

    async def listen(self) -> AsyncIterator[dict]:
        """Subscribe to the channel and yield decoded events."""
        redis_conn = aioredis.from_url(self.redis_url)
        pubsub: PubSub = redis_conn.pubsub()
        await pubsub.subscribe(self.channel)

        try:
            async for message in pubsub.listen():
                if message["type"] == "message":
                    try:
                        yield json.loads(message["data"])
                    except json.JSONDecodeError:
                        logger.warning(f"Invalid JSON in pub/sub message: {message['data']}")
        finally:
            await pubsub.unsubscribe(self.channel)
            await pubsub.close()
            await redis_conn.close()

    def close(self) -> None:
        """Release the publishing connection."""
        if self._redis is not None:
            self._redis.close()
            self._redis = None
