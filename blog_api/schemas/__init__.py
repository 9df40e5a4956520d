"""Pydantic schemas for request/response validation."""

from blog_api.schemas.auth import AuthData, LoginInput, UserInput
from blog_api.schemas.post import PostInput, PostPage

__all__ = [
    "UserInput",
    "LoginInput",
    "AuthData",
    "PostInput",
    "PostPage",
]
