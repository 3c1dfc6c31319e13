"""Account and session models"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

AVATAR_URLS = [
    "https://placehold.co/100x100.png?text=User1",
    "https://placehold.co/100x100.png?text=Pic2",
    "https://placehold.co/100x100.png?text=NewMe",
]

# Each rule: pattern the password must contain, message when it does not
PASSWORD_RULES = [
    (r"[a-z]", "Password must contain at least one lowercase letter."),
    (r"[A-Z]", "Password must contain at least one uppercase letter."),
    (r"[0-9]", "Password must contain at least one number."),
    (r"[^a-zA-Z0-9]", "Password must contain at least one special character."),
]


class SignInRequest(BaseModel):
    """Sign-in form"""
    email: EmailStr
    password: str = Field(min_length=1)


class SignUpRequest(BaseModel):
    """Sign-up form"""
    username: str = Field(min_length=3, max_length=20)
    full_name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def check_strength(cls, value: str) -> str:
        for pattern, message in PASSWORD_RULES:
            if not re.search(pattern, value):
                raise ValueError(message)
        return value

    @model_validator(mode="after")
    def check_passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match.")
        return self


class UserProfile(BaseModel):
    """Profile persisted for the signed-in user"""
    full_name: str
    username: str
    email: str
    avatar_url: str = AVATAR_URLS[0]
    joined_at: datetime = Field(default_factory=datetime.utcnow)


class SessionStatus(BaseModel):
    """Whether someone is signed in, and who"""
    logged_in: bool = False
    profile: Optional[UserProfile] = None


class SessionResponse(BaseModel):
    """Auth API response"""
    session: SessionStatus
    message: Optional[str] = None
