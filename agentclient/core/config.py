"""
Settings for talking to an agent.

Address, region, token and timeout come from the environment (or a .env file);
endpoint paths and header names are fixed here so client code never spells them.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to default when unset or invalid."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("[config] ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


# Agent HTTP API (from env)
NOMAD_ADDR: str = os.getenv("NOMAD_ADDR", "").strip() or "http://127.0.0.1:4646"
NOMAD_REGION: str = os.getenv("NOMAD_REGION", "").strip()
NOMAD_TOKEN: str = os.getenv("NOMAD_TOKEN", "").strip()

# Request timeout (seconds)
NOMAD_HTTP_TIMEOUT: float = _env_float("NOMAD_HTTP_TIMEOUT", 15.0)

# Header carrying the ACL token
TOKEN_HEADER: str = "X-Nomad-Token"

# Agent endpoints
AGENT_SELF_PATH: str = "/v1/agent/self"
AGENT_JOIN_PATH: str = "/v1/agent/join"
