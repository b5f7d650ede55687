"""Sign-in and password-strength schemas."""

from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PasswordStrengthRequest(BaseModel):
    password: str


class PasswordStrengthRead(BaseModel):
    """Score from 0 to 5 and its display label."""

    score: int
    label: str
