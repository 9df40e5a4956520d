"""Input sanitizing and validation.

Sanitizers return a cleaned copy of the input; validators collect every
violation before failing so the client sees all problems at once.
"""

from email_validator import EmailNotValidError, validate_email

from blog_api.errors import ValidationFailed
from blog_api.schemas.auth import UserInput
from blog_api.schemas.post import PostInput

MIN_PASSWORD_LENGTH = 5
MIN_TEXT_LENGTH = 5


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookup."""
    return email.strip().lower()


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def sanitize_user_input(user_input: UserInput) -> UserInput:
    return UserInput(
        email=normalize_email(user_input.email),
        name=user_input.name.strip(),
        password=user_input.password.strip(),
    )


def sanitize_post_input(post_input: PostInput) -> PostInput:
    return PostInput(
        title=post_input.title.strip(),
        content=post_input.content.strip(),
        image_url=post_input.image_url,
    )


def user_input_errors(user_input: UserInput) -> list[dict[str, str]]:
    """Collect the problems with a (sanitized) registration input."""
    errors = []
    if not is_email(user_input.email):
        errors.append({"message": "E-Mail is invalid."})
    if not user_input.password or len(user_input.password) < MIN_PASSWORD_LENGTH:
        errors.append({"message": "Password too short!"})
    if not user_input.name:
        errors.append({"message": "Name is required."})
    return errors


def post_input_errors(post_input: PostInput) -> list[dict[str, str]]:
    """Collect the problems with a (sanitized) post input."""
    errors = []
    if not post_input.title or len(post_input.title) < MIN_TEXT_LENGTH:
        errors.append({"message": "Title is invalid."})
    if not post_input.content or len(post_input.content) < MIN_TEXT_LENGTH:
        errors.append({"message": "Content is invalid."})
    return errors


def validate_user_input(user_input: UserInput) -> UserInput:
    """Sanitize and validate a registration input.

    Raises:
        ValidationFailed: with every violation found.
    """
    cleaned = sanitize_user_input(user_input)
    errors = user_input_errors(cleaned)
    if errors:
        raise ValidationFailed(errors)
    return cleaned


def validate_post_input(post_input: PostInput) -> PostInput:
    """Sanitize and validate a post input.

    Raises:
        ValidationFailed: with every violation found.
    """
    cleaned = sanitize_post_input(post_input)
    errors = post_input_errors(cleaned)
    if errors:
        raise ValidationFailed(errors)
    return cleaned
