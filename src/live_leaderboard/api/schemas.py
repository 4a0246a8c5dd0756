"""Pydantic models for HTTP request bodies."""

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """Body of POST /api/users."""

    name: str | None = None


class ClaimRequest(BaseModel):
    """Body of POST /api/claim."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId")
