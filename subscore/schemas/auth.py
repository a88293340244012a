"""Auth-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Caller identity recovered from a bearer token; lives for one request."""

    model_config = ConfigDict(frozen=True)

    email: str = ""
    name: str = ""
    picture: str = ""
    verified: bool = False


class IdentityEcho(BaseModel):
    email: str
    name: str
    image: str


class AuthCheckResponse(BaseModel):
    message: str
    timestamp: datetime
    user: IdentityEcho
