"""Authentication input and output schemas."""

from pydantic import BaseModel


class UserInput(BaseModel):
    """User registration input."""

    email: str
    name: str
    password: str


class LoginInput(BaseModel):
    """User login input."""

    email: str
    password: str


class AuthData(BaseModel):
    """Issued token and the id of the user it belongs to."""

    token: str
    user_id: str
