"""Base model for backend payloads and call inputs."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen model; fields the harness does not declare are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")
