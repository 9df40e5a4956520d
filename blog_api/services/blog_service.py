"""Blog operations: registration, login and post management.

Each public method implements one GraphQL operation. Authorization is always
checked before input validation, and validation before any database access.
"""

import logging

from blog_api.errors import Conflict, Forbidden, NotFound, Unauthenticated
from blog_api.models.post import Post
from blog_api.models.user import User
from blog_api.schemas.auth import AuthData, LoginInput, UserInput
from blog_api.schemas.post import PostInput, PostPage
from blog_api.services.auth import (
    Identity,
    create_access_token,
    get_password_hash,
    verify_password,
)
from blog_api.services.notifier import PostAction, PostNotifier
from blog_api.services.repository import BlogRepository
from blog_api.services.validation import (
    normalize_email,
    validate_post_input,
    validate_user_input,
)

logger = logging.getLogger(__name__)

POSTS_PER_PAGE = 2

# Sent by clients that have no image to attach
UNDEFINED_IMAGE = "undefined"


def has_image(image_url: str | None) -> bool:
    return bool(image_url) and image_url != UNDEFINED_IMAGE


class BlogService:
    """Service for user and post operations."""

    def __init__(self, repository: BlogRepository, notifier: PostNotifier | None = None):
        self.repository = repository
        self.notifier = notifier

    def _require_auth(self, identity: Identity) -> str:
        if not identity.is_authenticated or identity.user_id is None:
            raise Unauthenticated()
        return identity.user_id

    def _notify(self, action: PostAction, post: Post) -> None:
        if self.notifier is not None:
            self.notifier.publish(action, post)

    def create_user(self, user_input: UserInput) -> User:
        """Register a new user.

        The existence check and the insert are separate statements; two
        concurrent registrations of one email can both pass the check, in
        which case the unique index rejects the second insert.
        """
        cleaned = validate_user_input(user_input)

        if self.repository.find_user_by_email(cleaned.email):
            raise Conflict()

        user = User(
            email=cleaned.email,
            name=cleaned.name,
            password_hash=get_password_hash(cleaned.password),
        )
        user = self.repository.insert_user(user)
        logger.info(f"Registered user {user.id}")
        return user

    def login(self, login_input: LoginInput) -> AuthData:
        """Exchange email and password for a token.

        Unknown email and wrong password fail identically.
        """
        email = normalize_email(login_input.email)
        user = self.repository.find_user_by_email(email)
        if user is None or not verify_password(login_input.password, user.password_hash):
            raise Unauthenticated("Incorrect email or password.")

        token = create_access_token(user.id, user.email)
        return AuthData(token=token, user_id=str(user.id))

    def create_post(self, identity: Identity, post_input: PostInput) -> Post:
        user_id = self._require_auth(identity)
        cleaned = validate_post_input(post_input)

        user = self.repository.find_user_by_id(user_id)
        if user is None:
            raise Unauthenticated("Invalid user.")

        post = Post(
            title=cleaned.title,
            content=cleaned.content,
            image_url=cleaned.image_url if has_image(cleaned.image_url) else None,
            creator=user,
        )
        post = self.repository.insert_post(post)
        # Separate write: the post exists even if linking it fails
        self.repository.append_post_to_user(user, post)

        logger.info(f"User {user.id} created post {post.id}")
        self._notify(PostAction.CREATE, post)
        return post

    def posts(self, identity: Identity, page: int | None = None) -> PostPage:
        """Newest-first page of posts with creator names."""
        self._require_auth(identity)
        page = max(page or 1, 1)
        total_posts = self.repository.count_posts()
        posts = self.repository.list_posts(
            offset=(page - 1) * POSTS_PER_PAGE,
            limit=POSTS_PER_PAGE,
            newest_first=True,
            with_creator_name=True,
        )
        return PostPage(posts=posts, total_posts=total_posts)

    def post(self, identity: Identity, post_id: str) -> Post:
        self._require_auth(identity)
        post = self.repository.find_post_by_id(post_id, with_creator_name=True)
        if post is None:
            raise NotFound()
        return post

    def update_post(self, identity: Identity, post_id: str, post_input: PostInput) -> Post:
        """Replace a post's title and content, and its image when a new one is given.

        Only the post's creator may update it.
        """
        user_id = self._require_auth(identity)
        cleaned = validate_post_input(post_input)

        post = self.repository.find_post_by_id(post_id, with_creator_name=True)
        if post is None:
            raise NotFound()
        if str(post.creator_id) != user_id:
            raise Forbidden()

        post.title = cleaned.title
        post.content = cleaned.content
        if has_image(cleaned.image_url):
            post.image_url = cleaned.image_url
        post = self.repository.update_post(post)

        logger.info(f"User {user_id} updated post {post.id}")
        self._notify(PostAction.UPDATE, post)
        return post
