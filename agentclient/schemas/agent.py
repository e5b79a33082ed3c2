"""Schemas for the agent endpoints."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationInfo, field_validator

# section name (e.g. "member", "config", "stats") -> field name -> untyped value
AgentSnapshot = dict[str, dict[str, Any] | None]

snapshot_adapter: TypeAdapter[AgentSnapshot] = TypeAdapter(AgentSnapshot)


def decode_snapshot(body: Any) -> AgentSnapshot:
    """Validate a decoded self response. A null body is an empty snapshot."""
    return snapshot_adapter.validate_python({} if body is None else body)


class JoinResponse(BaseModel):
    """Response body for PUT /v1/agent/join."""

    num_nodes: int = Field(0, description="Number of nodes successfully contacted.")
    error: str = Field("", description="Error reported by the agent; empty on success.")

    model_config = {
        "json_schema_extra": {
            "examples": [{"num_nodes": 2, "error": ""}, {"num_nodes": 0, "error": "no addresses"}]
        }
    }

    @field_validator("num_nodes", "error", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # null leaves the zero value in place
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @classmethod
    def decode(cls, body: Any) -> "JoinResponse":
        """Validate a decoded join response. A null body is an empty response."""
        return cls.model_validate({} if body is None else body)


@dataclass(frozen=True)
class AgentClientState:
    """Static agent info cached on an Agent handle. Empty string means not known yet."""

    node_name: str = ""
    datacenter: str = ""
    region: str = ""
