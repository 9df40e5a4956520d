"""Database access for users and posts."""

from sqlalchemy.orm import Session, joinedload

from blog_api.models.post import Post
from blog_api.models.user import User


def _parse_id(value: int | str) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class BlogRepository:
    """CRUD operations the blog service depends on.

    Every write commits on its own; callers that need two writes get two
    separate transactions.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_user_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_user_by_id(self, user_id: int | str) -> User | None:
        parsed = _parse_id(user_id)
        if parsed is None:
            return None
        return self.db.query(User).filter(User.id == parsed).first()

    def insert_user(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def append_post_to_user(self, user: User, post: Post) -> None:
        """Add a post to the end of the user's post list."""
        user.posts.append(post)
        self.db.commit()

    def insert_post(self, post: Post) -> Post:
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post

    def _post_query(self, with_creator_name: bool):
        query = self.db.query(Post)
        if with_creator_name:
            query = query.options(joinedload(Post.creator).load_only(User.name))
        return query

    def find_post_by_id(self, post_id: int | str, with_creator_name: bool = False) -> Post | None:
        parsed = _parse_id(post_id)
        if parsed is None:
            return None
        return self._post_query(with_creator_name).filter(Post.id == parsed).first()

    def count_posts(self) -> int:
        return self.db.query(Post).count()

    def list_posts(
        self,
        offset: int,
        limit: int,
        newest_first: bool = True,
        with_creator_name: bool = False,
    ) -> list[Post]:
        query = self._post_query(with_creator_name)
        if newest_first:
            # id breaks ties between posts created within the same clock tick
            query = query.order_by(Post.created_at.desc(), Post.id.desc())
        else:
            query = query.order_by(Post.created_at, Post.id)
        return query.offset(offset).limit(limit).all()

    def update_post(self, post: Post) -> Post:
        """Persist the post's mutable fields."""
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        return post
