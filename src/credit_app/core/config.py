"""Configuration loader for database, encryption, logging and credit rules."""

from __future__ import annotations

import os
import secrets
from dataclasses import dataclass
from pathlib import Path

import yaml

from credit_app.core.crypto import CryptoService
from credit_app.core.errors import ConfigurationError
from credit_app.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DatabaseConfig:
    path: str
    key_env: str
    allow_sqlite_fallback: bool


@dataclass(frozen=True)
class EncryptionConfig:
    key_env: str


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "standard"


@dataclass(frozen=True)
class CreditConfig:
    max_first_installment_months: int = 3
    min_installments: int = 1
    max_installments: int = 48


@dataclass(frozen=True)
class AppConfig:
    database: DatabaseConfig
    encryption: EncryptionConfig
    logging: LoggingConfig
    credit: CreditConfig


DEFAULT_CONFIG_REL_PATH = Path("config/app.yaml")
DEFAULT_DB_KEY_ENV = "CREDIT_APP_DB_KEY"
DEFAULT_ENCRYPTION_KEY_ENV = "CREDIT_APP_ENCRYPTION_KEY"
RUNTIME_ENV_REL_PATH = Path("config/runtime.env")
_RUNTIME_ENV_LOADED = False


def _split_key_value(raw_line: str) -> tuple[str, str] | None:
    """Parse one line written by generate_keys (shell, export or PowerShell)."""
    line = raw_line.strip()
    for prefix in ("$env:", "export "):
        if line.startswith(prefix):
            line = line[len(prefix) :]
    if not line or line.startswith("#") or "=" not in line:
        return None

    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _runtime_env_path() -> Path:
    return _project_root() / RUNTIME_ENV_REL_PATH


def _key_files() -> list[Path]:
    """Key files in lookup order; a key already set is never overridden."""
    files = [Path.cwd() / ".env.local", _project_root() / ".env.local", _runtime_env_path()]
    return list(dict.fromkeys(path.resolve() for path in files))


def _load_key_files() -> None:
    """Copy keys from local key files into the environment, once per process."""
    global _RUNTIME_ENV_LOADED
    if _RUNTIME_ENV_LOADED:
        return
    for path in _key_files():
        if not path.is_file():
            continue
        for line in path.read_text(encoding="utf-8").splitlines():
            parsed = _split_key_value(line)
            if parsed:
                os.environ.setdefault(*parsed)
    _RUNTIME_ENV_LOADED = True


def ensure_runtime_keys(config: AppConfig) -> None:
    """Make the database and field keys available, generating them for a new database.

    Keys are generated only while the configured database file does not exist yet.
    Generating new keys for an existing file would leave its rows unreadable.
    """
    _load_key_files()
    names = (config.database.key_env, config.encryption.key_env)
    missing = [name for name in names if not os.getenv(name)]
    if not missing:
        return

    db_path = Path(config.database.path)
    if db_path.exists():
        raise ConfigurationError(
            f"Runtime key file is missing while database {db_path} exists. "
            f"Restore {_runtime_env_path()} or set {', '.join(missing)}."
        )

    generated = {
        config.database.key_env: os.getenv(config.database.key_env) or secrets.token_urlsafe(48),
        config.encryption.key_env: (
            os.getenv(config.encryption.key_env) or CryptoService.generate_base64_key()
        ),
    }
    os.environ.update(generated)
    path = _runtime_env_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "".join(f"{name}='{value}'\n" for name, value in generated.items()),
        encoding="utf-8",
    )
    logger.info("Generated runtime keys in %s", path)


def resolve_default_config_path() -> Path:
    """Return CREDIT_APP_CONFIG_PATH, else config/app.yaml under cwd or the project root."""
    env_path = os.getenv("CREDIT_APP_CONFIG_PATH")
    if env_path:
        return Path(env_path)
    candidates = [Path.cwd() / DEFAULT_CONFIG_REL_PATH, _project_root() / DEFAULT_CONFIG_REL_PATH]
    return next((path for path in candidates if path.exists()), candidates[0])


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load the app configuration from YAML."""
    path = config_path or resolve_default_config_path()
    try:
        with path.open("r", encoding="utf-8") as file:
            raw = yaml.safe_load(file) or {}
    except FileNotFoundError as error:
        raise ConfigurationError(f"Configuration file not found: {path}") from error

    try:
        db = raw["db"]
        encryption = raw["encryption"]
    except KeyError as error:
        raise ConfigurationError(f"Missing configuration section: {error.args[0]}") from error
    logging_section = raw.get("logging") or {}
    credit_section = raw.get("credit") or {}

    credit = CreditConfig(
        max_first_installment_months=int(credit_section.get("max_first_installment_months", 3)),
        min_installments=int(credit_section.get("min_installments", 1)),
        max_installments=int(credit_section.get("max_installments", 48)),
    )
    if credit.min_installments < 1 or credit.min_installments > credit.max_installments:
        raise ConfigurationError("credit.min_installments must be between 1 and max_installments.")

    return AppConfig(
        database=DatabaseConfig(
            path=str(db["path"]),
            key_env=str(db.get("key_env", DEFAULT_DB_KEY_ENV)),
            allow_sqlite_fallback=bool(db.get("allow_sqlite_fallback", False)),
        ),
        encryption=EncryptionConfig(
            key_env=str(encryption.get("key_env", DEFAULT_ENCRYPTION_KEY_ENV)),
        ),
        logging=LoggingConfig(
            level=str(logging_section.get("level", "INFO")),
            format=str(logging_section.get("format", "standard")),
        ),
        credit=credit,
    )


def get_required_env(name: str) -> str:
    """Return a required environment variable or raise a clear error."""
    _load_key_files()
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Required environment variable is missing: {name}")
    return value
