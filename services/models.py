"""Domain types shared by the stores, services and HTTP layer."""
from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    EXTERNAL_SERVICE = "external_service"


class AuthError(Exception):
    """Base class for login/signup failures surfaced to the caller."""

    kind = ErrorKind.AUTHENTICATION
    message = "Authentication failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidCredentialsError(AuthError):
    message = "Invalid email or password"


class EmailInUseError(AuthError):
    message = "Email already in use"


def generate_id(prefix: str) -> str:
    """Timestamp plus random suffix, e.g. ``msg-1718000000000-3fa9c1d2``."""
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: str
    email: str
    display_name: Optional[str] = None

    @classmethod
    def from_email(cls, uid: str, email: str) -> "User":
        return cls(uid=uid, email=email, display_name=email.split("@", 1)[0])


class CredentialEntry(BaseModel):
    password_hash: str
    uid: str


class Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: generate_id("msg"))
    role: Literal["user", "assistant"]
    content: str
    created_at: Optional[str] = Field(default_factory=utc_now_iso)


class AskResult(BaseModel):
    """Outcome of a chat question.

    ``text`` is always safe to show to the user; ``error`` tells callers
    which kind of soft failure produced it, or is None on success.
    """

    text: str
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AnswerQuestionInput(BaseModel):
    question: str


class AnswerQuestionOutput(BaseModel):
    answer: str


class PredictSignalStrengthInput(BaseModel):
    latitude: float
    longitude: float


class CarrierPrediction(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    operator: str = Field(..., description="Mobile network operator name, e.g. Jio")
    rating: float = Field(..., ge=0, le=5, description="Signal quality rating from 0 to 5")
    download_speed: float = Field(..., description="Expected download speed in Mbps")
    upload_speed: float = Field(..., description="Expected upload speed in Mbps")


class PredictSignalStrengthOutput(BaseModel):
    predictions: List[CarrierPrediction] = Field(
        default_factory=list,
        description="One prediction per carrier, best first",
    )
