"""
Confession Board — User Pydantic Schemas
=========================================

What:  Request bodies and response rows for /register and /login.

Request fields are deliberately untyped (`Any`, default None): whatever the
client sends is forwarded to hashing and the INSERT, and a missing field
fails there as a 500 rather than as a 422 here.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Body of POST /register and POST /login."""
    username: Any = Field(default=None, description="Login name")
    password: Any = Field(default=None, description="Plaintext password")


class UserRow(BaseModel):
    """
    A full `users` row as stored, hash included.

    `to_response()` is the serialization boundary where the hash can be
    redacted (EXPOSE_PASSWORD_HASH=false).
    """
    id: int = Field(description="Server-generated user id")
    username: str = Field(description="Login name")
    password: str = Field(description="bcrypt hash of the password")

    model_config = {"from_attributes": True}

    def to_response(self, expose_password_hash: bool = True) -> Dict[str, Any]:
        if expose_password_hash:
            return self.model_dump()
        return self.model_dump(exclude={"password"})


def credentials_or_empty(payload: Optional[CredentialsRequest]) -> CredentialsRequest:
    """A request without a JSON body behaves like an empty object."""
    return payload if payload is not None else CredentialsRequest()
