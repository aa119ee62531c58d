from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from services.models import ErrorKind, User


class Credentials(BaseModel):
    email: str = Field(..., min_length=1, description="Account email, used as the login key")
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    user: Optional[User] = None
    loading: bool = False


class AskRequest(BaseModel):
    # Empty values are allowed through; the service answers them with a
    # validation message instead of an HTTP error.
    question: str = Field("", description="User's latest message")
    user_id: str = Field("", description="uid of the logged-in user")


class AskResponse(BaseModel):
    answer: str
    error: Optional[ErrorKind] = None


class SignalRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="User's latitude location")
    longitude: float = Field(..., ge=-180, le=180, description="User's longitude location")
