"""Generate runtime key lines for credit-app."""

from __future__ import annotations

import argparse
import secrets
import sys
from pathlib import Path

from credit_app.core.config import DEFAULT_DB_KEY_ENV, DEFAULT_ENCRYPTION_KEY_ENV
from credit_app.core.crypto import CryptoService
from credit_app.core.logging import get_logger, setup_logging

logger = get_logger("credit_app.scripts.generate_keys")

LINE_TEMPLATES = {
    "shell": "{name}='{value}'",
    "shell-export": "export {name}='{value}'",
    "powershell": "$env:{name}='{value}'",
}


def render_lines(env_format: str) -> list[str]:
    """Generate a fresh DB key and AES key rendered in the requested format."""
    template = LINE_TEMPLATES[env_format]
    keys = {
        DEFAULT_DB_KEY_ENV: secrets.token_urlsafe(48),
        DEFAULT_ENCRYPTION_KEY_ENV: CryptoService.generate_base64_key(),
    }
    return [template.format(name=name, value=value) for name, value in keys.items()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate credit-app runtime keys.")
    parser.add_argument("--write-env", type=Path, default=None, help="File to write the key lines to.")
    parser.add_argument("--format", choices=sorted(LINE_TEMPLATES), default="shell")
    parser.add_argument("--stdout", action="store_true", help="Print the key lines.")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    args = parser.parse_args(argv)

    setup_logging()
    lines = render_lines(args.format)

    if args.write_env:
        if args.write_env.exists() and not args.force:
            logger.error("Key file already exists: %s (use --force)", args.write_env)
            return 1
        args.write_env.parent.mkdir(parents=True, exist_ok=True)
        args.write_env.write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.info("Key file written: %s", args.write_env)

    if args.stdout:
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
