"""
Agent endpoints: self-description and gossip join.

Responsibility: Query /v1/agent/self, cache the agent's static identity
(node name, datacenter, region) on the handle, and send join requests.
"""

import logging
import threading
from typing import Any

from pydantic import ValidationError

from agentclient.api.client import Client, WriteOptions
from agentclient.core.config import AGENT_JOIN_PATH, AGENT_SELF_PATH
from agentclient.core.errors import JoinError, TransportError
from agentclient.schemas.agent import AgentClientState, AgentSnapshot, JoinResponse, decode_snapshot

logger = logging.getLogger(__name__)


def snapshot_member(info: AgentSnapshot) -> dict[str, Any]:
    """Return the "member" section of a snapshot, or an empty dict when absent."""
    return info.get("member") or {}


class Agent:
    """
    Handle for the agent-specific endpoints of one agent.

    Node name, datacenter and region never change for a running agent, so the
    first non-empty value seen for each is kept for the life of the handle.
    """

    def __init__(self, client: Client) -> None:
        self.client = client
        self._node_name = ""
        self._datacenter = ""
        self._region = ""
        self._lock = threading.Lock()

    @property
    def cached(self) -> AgentClientState:
        with self._lock:
            return AgentClientState(self._node_name, self._datacenter, self._region)

    def get_self(self) -> AgentSnapshot:
        """
        Query the self endpoint and return the agent's description.

        Also fills any still-empty cached fields from the "member" section.
        """
        try:
            out, _ = self.client.query(AGENT_SELF_PATH)
            info = decode_snapshot(out)
        except (TransportError, ValidationError) as e:
            logger.warning("[agent:self] query failed: %s", e)
            raise TransportError(
                f"failed querying self endpoint: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e

        self._populate_cache(info)
        logger.info("[agent:self] OUT sections=%s", sorted(info))
        return info

    def _populate_cache(self, info: AgentSnapshot) -> None:
        member = snapshot_member(info)
        name = member.get("Name")
        tags = member.get("Tags")
        with self._lock:
            if not self._node_name and isinstance(name, str):
                self._node_name = name
            if isinstance(tags, dict):
                dc = tags.get("dc")
                region = tags.get("region")
                if not self._datacenter and isinstance(dc, str):
                    self._datacenter = dc
                if not self._region and isinstance(region, str):
                    self._region = region

    def _cached_or_self(self, attr: str) -> str:
        value = getattr(self, attr)
        if value:
            return value
        self.get_self()
        return getattr(self, attr)

    def node_name(self) -> str:
        """Return the agent's node name, querying the agent on a cache miss."""
        return self._cached_or_self("_node_name")

    def datacenter(self) -> str:
        """Return the datacenter the agent is a member of."""
        return self._cached_or_self("_datacenter")

    def region(self) -> str:
        """Return the region the agent is in."""
        return self._cached_or_self("_region")

    def join(self, *addresses: str) -> None:
        """
        Instruct the agent to join other servers via the gossip protocol.

        Every address is sent as-is; the agent attempts all of them. No error is
        raised as long as the agent reports none, even if num_nodes is 0.
        """
        options = WriteOptions(params=[("address", addr) for addr in addresses])
        logger.info("[agent:join] IN  addresses=%d", len(addresses))
        try:
            out, _ = self.client.write(AGENT_JOIN_PATH, None, options)
            resp = JoinResponse.decode(out)
        except (TransportError, ValidationError) as e:
            logger.warning("[agent:join] request failed: %s", e)
            raise TransportError(
                f"failed joining: {e}",
                status_code=getattr(e, "status_code", None),
            ) from e

        if resp.error:
            logger.warning("[agent:join] agent reported error: %s", resp.error)
            raise JoinError(f"failed joining: {resp.error}", remote_error=resp.error, num_nodes=resp.num_nodes)
        logger.info("[agent:join] OUT num_nodes=%d", resp.num_nodes)
