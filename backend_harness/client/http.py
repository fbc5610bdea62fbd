"""Backend endpoint calling app functions over HTTP."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import ValidationError

from backend_harness.client.base import AppEndpoint, RpcCallError
from backend_harness.client.config import ClientConfig
from backend_harness.client.models import CallErrorResponse, CallResponse

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class HttpAppClient(AppEndpoint):
    """Calls functions of an installed app through the backend's HTTP gateway."""

    config: ClientConfig
    session: aiohttp.ClientSession = field(repr=False)

    @property
    def init_timeout(self) -> float:
        """Init timeout from the client configuration."""
        return self.config.init_timeout

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ClientConfig
    ) -> AsyncGenerator["HttpAppClient", None]:
        """Create client with managed session lifecycle."""
        headers = {"Accept": "application/json"}
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token.get_secret_value()}"
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
        ) as session:
            yield cls(config=config, session=session)

    async def call(
        self,
        cell: str,
        zome: str,
        fn_name: str,
        payload: Any = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Post the call and decode the result or the backend error."""
        seconds = timeout if timeout is not None else self.config.default_timeout
        url = f"/apps/{self.config.app_id}/call"
        body = {
            "agent": self.config.agent,
            "cell": cell,
            "zome": zome,
            "fn_name": fn_name,
            "payload": payload,
        }

        log.debug(
            "Calling %s/%s.%s as %s (timeout=%.1fs)",
            cell,
            zome,
            fn_name,
            self.config.agent,
            seconds,
        )

        try:
            async with self.session.post(
                url, json=body, timeout=aiohttp.ClientTimeout(total=seconds)
            ) as response:
                if response.status == 200:
                    data = await response.json()
                    return CallResponse.model_validate(data).result
                status = response.status
                text = await response.text()
        except TimeoutError as error:
            raise TimeoutError(
                f"Call {zome}.{fn_name} did not complete within {seconds} seconds"
            ) from error

        log.debug("Call %s.%s rejected: %s %s", zome, fn_name, status, text)
        raise call_error(status, text)


def call_error(status: int, text: str) -> RpcCallError:
    """Build the error for a non-200 response body."""
    try:
        error = CallErrorResponse.model_validate_json(text)
    except ValidationError:
        return RpcCallError("transport", text or f"HTTP {status}", status)
    return RpcCallError(error.type, error.message, status)
