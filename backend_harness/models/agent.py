"""Models for agent information returned by the backend."""

from backend_harness.models.base import Model


class AgentInfo(Model):
    """Result of whoami."""

    agent_initial_pubkey: str
    agent_latest_pubkey: str
