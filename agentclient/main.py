#!/usr/bin/env python3
"""
Command-line access to an agent's self and join endpoints.

    python -m agentclient.main self
    python -m agentclient.main info
    python -m agentclient.main join 10.0.0.2 10.0.0.3

Address, region and token default to NOMAD_ADDR, NOMAD_REGION and NOMAD_TOKEN
(a .env file in the working directory is honored).
"""

import argparse
import json
import logging
import sys

from agentclient.api.client import Client
from agentclient.core.errors import AgentClientError

logging.basicConfig(level=logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query or instruct a cluster agent.")
    parser.add_argument("--address", default=None, help="Agent HTTP address (default: NOMAD_ADDR).")
    parser.add_argument("--region", default=None, help="Region to forward requests to (default: NOMAD_REGION).")
    parser.add_argument("--token", default=None, help="ACL token (default: NOMAD_TOKEN).")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("self", help="Print the agent's self-description as JSON.")
    sub.add_parser("info", help="Print node name, datacenter and region.")
    join = sub.add_parser("join", help="Join the agent to other servers.")
    join.add_argument("addresses", nargs="+", help="Addresses of servers to join.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    with Client(address=args.address, region=args.region, token=args.token) as client:
        agent = client.agent()
        try:
            if args.command == "self":
                print(json.dumps(agent.get_self(), indent=2, sort_keys=True))
            elif args.command == "info":
                print(f"node:       {agent.node_name()}")
                print(f"datacenter: {agent.datacenter()}")
                print(f"region:     {agent.region()}")
            elif args.command == "join":
                agent.join(*args.addresses)
                print(f"Joined via {len(args.addresses)} address(es).")
        except AgentClientError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
