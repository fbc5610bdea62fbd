"""Configuration for the backend RPC client."""

import os
from typing import Self

from pydantic import BaseModel, SecretStr

URL_ENV = "BACKEND_HARNESS_URL"
APP_ID_ENV = "BACKEND_HARNESS_APP_ID"
AGENT_ENV = "BACKEND_HARNESS_AGENT"
TOKEN_ENV = "BACKEND_HARNESS_TOKEN"


class ClientConfig(BaseModel):
    """Configuration for HttpAppClient."""

    api_base_url: str = "http://localhost:8888"
    app_id: str = "test"
    agent: str = "alice"
    token: SecretStr | None = None
    default_timeout: float = 30
    # whoami during init may have to wait for genesis on a cold backend
    init_timeout: float = 300

    @classmethod
    def from_env(cls, **overrides: object) -> Self:
        """Build a config from BACKEND_HARNESS_* variables, then overrides."""
        values: dict[str, object] = {}
        for key, env in (
            ("api_base_url", URL_ENV),
            ("app_id", APP_ID_ENV),
            ("agent", AGENT_ENV),
            ("token", TOKEN_ENV),
        ):
            if (value := os.environ.get(env)) is not None:
                values[key] = value
        values.update(overrides)
        return cls.model_validate(values)
