"""Command-line entry point.

Usage:
    ssl-binder --app-name web-01 --hostname shop.example.com \\
        --vault-name kv-shared --certificate-name shop-cert
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys

from ssl_binder.config import load_config
from ssl_binder.errors import BindingError
from ssl_binder.orchestrator import bind_certificate

logger = logging.getLogger("ssl_binder")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _non_empty(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("must not be empty")
    return value


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ssl-binder",
        description="Bind a Key Vault certificate to an App Service custom hostname (SNI).",
    )
    parser.add_argument("--app-name", required=True, type=_non_empty, help="Web app (site) name")
    parser.add_argument("--hostname", required=True, type=_non_empty, help="Custom hostname to bind, e.g. shop.example.com")
    parser.add_argument("--vault-name", required=True, type=_non_empty, help="Key Vault holding the certificate")
    parser.add_argument(
        "--certificate-name",
        required=True,
        type=_non_empty,
        help="Certificate name; its password is read from '<name>-password'",
    )
    parser.add_argument("--scratch-dir", help="Directory for the temporary PFX file (overrides SCRATCH_DIR)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)

    try:
        config = load_config()
    except ValueError as e:
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
        logger.error("Configuration error: %s", e)
        return 1

    logging.basicConfig(level=config.log_level, format=_LOG_FORMAT)
    if args.scratch_dir:
        config = dataclasses.replace(config, scratch_dir=args.scratch_dir)

    try:
        result = bind_certificate(
            config,
            app_name=args.app_name,
            hostname=args.hostname,
            vault_name=args.vault_name,
            certificate_name=args.certificate_name,
        )
    except BindingError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
