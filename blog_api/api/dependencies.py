"""FastAPI dependencies for identity, database and services."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection

from blog_api.database import get_db
from blog_api.errors import Unauthenticated
from blog_api.services.auth import Identity, verify_authorization_header
from blog_api.services.blog_service import BlogService
from blog_api.services.notifier import PostNotifier
from blog_api.services.repository import BlogRepository


def get_identity(authorization: Annotated[str | None, Header()] = None) -> Identity:
    """Identity of the caller; anonymous when the token is missing or invalid."""
    return verify_authorization_header(authorization)


def require_identity(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
    """Identity of the caller, rejecting anonymous requests."""
    if not identity.is_authenticated:
        raise Unauthenticated()
    return identity


def get_notifier(connection: HTTPConnection) -> PostNotifier:
    """Application-wide notifier created in the lifespan."""
    return connection.app.state.notifier


def get_blog_service(
    db: Annotated[Session, Depends(get_db)],
    notifier: Annotated[PostNotifier, Depends(get_notifier)],
) -> BlogService:
    """Get blog service with dependencies."""
    return BlogService(BlogRepository(db), notifier)
