"""
Gateway Entry Point
===================

Connects to an OPC UA server, indexes its variables and serves them over HTTP.

Usage:
    python -m opcua_http_gateway [opc.tcp://host:port] [--port 3001]

Author: Guilherme F. G. Santos
Date: February 2026
"""

import argparse
import asyncio
import logging
import signal
import sys
from contextlib import suppress

from .errors import GatewayError
from .gateway import GatewayServer, GatewayServerConfig
from .opcua import DEFAULT_ENDPOINT_URL, ROOT_NODE_ID, SessionConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="OPC UA to HTTP Gateway")
    parser.add_argument(
        "endpoint",
        nargs="?",
        default=DEFAULT_ENDPOINT_URL,
        help="OPC UA endpoint URL",
    )
    parser.add_argument("--host", type=str, default="0.0.0.0", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=3001, help="HTTP port")
    parser.add_argument(
        "--root", type=str, default=ROOT_NODE_ID, help="Node id to start discovery from"
    )
    parser.add_argument(
        "--static-dir",
        type=str,
        default="files",
        help="Directory served under /static",
    )
    parser.add_argument(
        "--max-retry", type=int, default=1, help="Extra OPC UA connection attempts"
    )
    parser.add_argument(
        "--initial-delay",
        type=float,
        default=1.0,
        help="Delay between connection attempts [seconds]",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_server(args: argparse.Namespace) -> GatewayServer:
    session_config = SessionConfig(
        endpoint_url=args.endpoint,
        max_retry=args.max_retry,
        initial_delay=args.initial_delay,
    )
    server_config = GatewayServerConfig(
        host=args.host,
        port=args.port,
        root_node_id=args.root,
        static_dir=args.static_dir,
    )
    return GatewayServer(session_config, server_config)


async def run(server: GatewayServer):
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops
        with suppress(NotImplementedError):
            loop.add_signal_handler(sig, server.request_stop)

    await server.run()


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("=" * 70)
    logger.info("OPC UA HTTP GATEWAY")
    logger.info("=" * 70)
    logger.info(f"OPC UA endpoint: {args.endpoint}")

    server = build_server(args)

    try:
        asyncio.run(run(server))
    except GatewayError as e:
        logger.error(f"Gateway startup failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"couldn't start Web server: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")

    return 0


if __name__ == "__main__":
    sys.exit(main())
