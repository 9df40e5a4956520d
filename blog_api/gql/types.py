"""GraphQL object and input types."""

from datetime import datetime

import strawberry
from strawberry.types import Info

from blog_api.gql.context import BlogContext
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.schemas.auth import AuthData, UserInput
from blog_api.schemas.post import PostInput, PostPage


def _isoformat(value: datetime | None) -> str:
    return value.isoformat() if value else ""


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID = strawberry.field(name="_id")
    name: str
    email: str
    status: str
    model: strawberry.Private[User]
    # Write-only: never populated in responses
    password: str | None = None

    @strawberry.field
    async def posts(self, info: Info[BlogContext, None]) -> list["PostType"]:
        return await info.context.run_sync(lambda: PostType.from_models(self.model.posts))

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(user.id)),
            name=user.name,
            email=user.email,
            status=user.status,
            model=user,
        )


@strawberry.type(name="Post")
class PostType:
    id: strawberry.ID = strawberry.field(name="_id")
    title: str
    content: str
    image_url: str | None
    created_at: str
    updated_at: str
    model: strawberry.Private[Post]

    @strawberry.field
    async def creator(self, info: Info[BlogContext, None]) -> UserType:
        return await info.context.run_sync(lambda: UserType.from_model(self.model.creator))

    @classmethod
    def from_model(cls, post: Post) -> "PostType":
        return cls(
            id=strawberry.ID(str(post.id)),
            title=post.title,
            content=post.content,
            image_url=post.image_url,
            created_at=_isoformat(post.created_at),
            updated_at=_isoformat(post.updated_at),
            model=post,
        )

    @classmethod
    def from_models(cls, posts: list[Post]) -> list["PostType"]:
        return [cls.from_model(post) for post in posts]


@strawberry.type(name="AuthData")
class AuthDataType:
    token: str
    user_id: str

    @classmethod
    def from_schema(cls, data: AuthData) -> "AuthDataType":
        return cls(token=data.token, user_id=data.user_id)


@strawberry.type(name="PostData")
class PostDataType:
    posts: list[PostType]
    total_posts: int

    @classmethod
    def from_schema(cls, page: PostPage) -> "PostDataType":
        return cls(
            posts=PostType.from_models(page.posts),
            total_posts=page.total_posts,
        )


@strawberry.input
class UserInputData:
    email: str
    name: str
    password: str

    def to_schema(self) -> UserInput:
        return UserInput(email=self.email, name=self.name, password=self.password)


@strawberry.input
class PostInputData:
    title: str
    content: str
    image_url: str | None = None

    def to_schema(self) -> PostInput:
        return PostInput(title=self.title, content=self.content, image_url=self.image_url)
