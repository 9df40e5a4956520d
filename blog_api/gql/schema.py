"""GraphQL schema and its FastAPI router."""

import logging
from typing import Any

import strawberry
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult, Info

from blog_api.errors import BlogError, Internal
from blog_api.gql.context import BlogContext, get_context
from blog_api.gql.types import (
    AuthDataType,
    PostDataType,
    PostInputData,
    PostType,
    UserInputData,
    UserType,
)
from blog_api.schemas.auth import LoginInput

logger = logging.getLogger(__name__)


@strawberry.type
class Query:
    @strawberry.field
    async def login(
        self, info: Info[BlogContext, None], email: str, password: str
    ) -> AuthDataType:
        service = info.context.service
        data = await info.context.run_sync(
            service.login, LoginInput(email=email, password=password)
        )
        return AuthDataType.from_schema(data)

    @strawberry.field
    async def posts(self, info: Info[BlogContext, None], page: int | None = None) -> PostDataType:
        context = info.context
        return await context.run_sync(
            lambda: PostDataType.from_schema(context.service.posts(context.identity, page))
        )

    @strawberry.field
    async def post(self, info: Info[BlogContext, None], id: strawberry.ID) -> PostType:
        context = info.context
        return await context.run_sync(
            lambda: PostType.from_model(context.service.post(context.identity, id))
        )


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_user(
        self, info: Info[BlogContext, None], user_input: UserInputData
    ) -> UserType:
        service = info.context.service
        return await info.context.run_sync(
            lambda: UserType.from_model(service.create_user(user_input.to_schema()))
        )

    @strawberry.mutation
    async def create_post(
        self, info: Info[BlogContext, None], post_input: PostInputData
    ) -> PostType:
        context = info.context
        return await context.run_sync(
            lambda: PostType.from_model(
                context.service.create_post(context.identity, post_input.to_schema())
            )
        )

    @strawberry.mutation
    async def update_post(
        self, info: Info[BlogContext, None], id: strawberry.ID, post_input: PostInputData
    ) -> PostType:
        context = info.context
        return await context.run_sync(
            lambda: PostType.from_model(
                context.service.update_post(context.identity, id, post_input.to_schema())
            )
        )


schema = strawberry.Schema(query=Query, mutation=Mutation)


def format_error(error: GraphQLError) -> dict[str, Any]:
    """Shape a GraphQL error for the client.

    Errors raised by resolvers become ``{message, status, data}``; errors
    produced by the GraphQL engine itself (syntax, unknown fields, bad
    arguments or variables) are returned as the engine formats them.
    """
    original = error.original_error
    if original is None or error.path is None or isinstance(original, GraphQLError):
        return error.formatted
    if not isinstance(original, BlogError):
        logger.error(f"Unexpected error resolving {error.path}: {original!r}")
        original = Internal()
    return {"message": original.message, "status": original.status_code, "data": original.data}


class BlogGraphQLRouter(GraphQLRouter):
    """GraphQL router that reshapes application errors."""

    async def process_result(self, request, result: ExecutionResult) -> GraphQLHTTPResponse:
        data: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            data["errors"] = [format_error(err) for err in result.errors]
        return data


graphql_router = BlogGraphQLRouter(schema, context_getter=get_context)
