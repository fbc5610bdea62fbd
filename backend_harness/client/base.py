"""Abstract base for endpoints that call functions on the backend."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from backend_harness.models.agent import AgentInfo

log = logging.getLogger(__name__)

DEFAULT_INIT_TIMEOUT = 300.0


class RpcCallError(Exception):
    """Raised when the backend rejects a call.

    The kind is the backend's error type (e.g. "guest", "ribosome"), or
    "transport" when the response carried no structured error.
    """

    def __init__(self, kind: str, message: str, status: int | None = None) -> None:
        """Create the error from the backend's error kind and message."""
        super().__init__(f"[{kind}] {message}")
        self.kind = kind
        self.message = message
        self.status = status


@dataclass(frozen=True, kw_only=True)
class AppEndpoint(ABC):
    """A callable RPC endpoint of an installed backend app."""

    @property
    def init_timeout(self) -> float:
        """Seconds to wait for a cell's init on the first call."""
        return DEFAULT_INIT_TIMEOUT

    @abstractmethod
    async def call(
        self,
        cell: str,
        zome: str,
        fn_name: str,
        payload: Any = None,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Call a function on the backend and return its decoded result.

        Args:
            cell: Cell (role) the function lives in
            zome: Module within the cell
            fn_name: Function name
            payload: JSON-compatible input, None for unit input
            timeout: Seconds to wait, None for the endpoint default

        Returns:
            The function's result

        Raises:
            RpcCallError: If the backend returned an error
            TimeoutError: If no response arrived within the timeout

        """

    async def whoami(
        self, cell: str, zome: str, timeout: float | None = None
    ) -> AgentInfo:
        """Call whoami, which also waits for the cell's init to finish."""
        result = await self.call(cell, zome, "whoami", None, timeout=timeout)
        return AgentInfo.model_validate(result)


async def wait_for_init(endpoint: AppEndpoint, cell: str, zome: str) -> AgentInfo:
    """Wait until the cell has finished init, bounded by the init timeout.

    The first call into a cell runs its init, so scenarios call this once per
    cell before anything else.
    """
    info = await endpoint.whoami(cell, zome, timeout=endpoint.init_timeout)
    log.info("Cell %s initialized for agent %s", cell, info.agent_initial_pubkey)
    return info
