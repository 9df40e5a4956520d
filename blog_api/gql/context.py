"""Per-request GraphQL context."""

import asyncio
from collections.abc import Callable
from typing import Annotated, TypeVar

from fastapi import Depends
from starlette.concurrency import run_in_threadpool
from strawberry.fastapi import BaseContext

from blog_api.api.dependencies import get_blog_service, get_identity
from blog_api.services.auth import Identity
from blog_api.services.blog_service import BlogService

T = TypeVar("T")


class BlogContext(BaseContext):
    """What every resolver can reach: the caller and the blog service."""

    def __init__(self, identity: Identity, service: BlogService):
        super().__init__()
        self.identity = identity
        self.service = service
        # The request's database session is not safe for concurrent use
        self._session_lock = asyncio.Lock()

    async def run_sync(self, func: Callable[..., T], *args) -> T:
        """Run blocking service or ORM work in the threadpool.

        Calls from one request run one at a time since they share a session.
        """
        async with self._session_lock:
            return await run_in_threadpool(func, *args)


async def get_context(
    identity: Annotated[Identity, Depends(get_identity)],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> BlogContext:
    return BlogContext(identity=identity, service=service)
