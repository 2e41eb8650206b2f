"""SendSafely action utilities. Use --help for usage."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv

from config.config import DEFAULT_CONFIG_FILE, NodeConfig, load_config
from core.logging.setup import setup_logging
from core.security.redaction import sanitize_error
from sendsafely_node.credentials import SendSafelyCredentials, verify_credentials

# Project root directory (where .env file is located)
# __main__.py is at src/sendsafely_node/__main__.py, so root is 3 levels up
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Placeholder logger until setup_logging() is called in main()
logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m sendsafely_node",
        description="SendSafely workflow action utilities",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Check that the configured API key and secret are accepted
    python -m sendsafely_node verify-credentials

    # Use a specific config file
    python -m sendsafely_node verify-credentials --config /path/to/config.yaml

    # Print the effective configuration (secrets masked)
    python -m sendsafely_node show-config
        """,
    )

    parser.add_argument(
        "command",
        choices=["verify-credentials", "show-config"],
        help="Command to run",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help="Path to config.yaml (default: src/config/config.yaml)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config or LOG_LEVEL)",
    )

    return parser.parse_args(argv)


async def run_verify_credentials(config: NodeConfig) -> int:
    """Run the credential test; 0 when SendSafely accepts the credentials."""
    try:
        credentials = SendSafelyCredentials.from_mapping(
            {
                "baseUrl": config.base_url,
                "apiKey": config.api_key,
                "apiSecret": config.api_secret,
            }
        )
        user = await verify_credentials(
            credentials, timeout_seconds=config.request_timeout_seconds
        )
    except Exception as e:
        message = sanitize_error(e)
        logger.error("Credential test failed", extra={"error_message": message})
        print(f"Credential test failed: {message}", file=sys.stderr)
        return 1

    email = user.get("email")
    print(f"Credentials OK{f' ({email})' if email else ''}")
    return 0


def run_show_config(config: NodeConfig) -> int:
    print(json.dumps(config.masked(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    global logger

    load_dotenv(PROJECT_ROOT / ".env")
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (ValueError, OSError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {sanitize_error(e)}", file=sys.stderr)
        return 1

    setup_logging(
        level=args.log_level or config.log_level,
        json_format=config.log_format == "json",
        log_file=Path(config.log_file) if config.log_file else None,
    )
    logger = logging.getLogger(__name__)

    if args.command == "show-config":
        return run_show_config(config)
    return asyncio.run(run_verify_credentials(config))


if __name__ == "__main__":
    sys.exit(main())
