"""Models for the post entity of the sample backend app."""

from typing import Any

from pydantic import Field

from backend_harness.models.base import Model


class Post(Model):
    """A post entry, both as create input and as decoded get_post result."""

    message: str = Field(..., description="Post body")
    author: str = Field(..., description="Agent public key of the author")
    published_at: int = Field(..., description="Publish time in epoch milliseconds")
    last_updated: int = Field(..., description="Last update in epoch milliseconds")
    metadata: dict[str, Any] = Field(default_factory=dict)


class GetEntityInput(Model):
    """Input of get_post."""

    id: str


class UpdateEntityInput(Model):
    """Input of update_post."""

    base: str = Field(..., description="Action hash of the entry being updated")
    entry: Post
