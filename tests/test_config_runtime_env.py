from __future__ import annotations

import os
from pathlib import Path

import pytest

from credit_app.core import config as app_config
from credit_app.core.errors import ConfigurationError


@pytest.fixture
def no_keys(monkeypatch, tmp_path: Path) -> Path:
    """Clear both keys and point the runtime key file into tmp_path."""
    runtime_env = tmp_path / "config" / "runtime.env"
    for name in ("CREDIT_APP_DB_KEY", "CREDIT_APP_ENCRYPTION_KEY", "LEDGER_KEY"):
        # setenv first so monkeypatch restores the variable after keys are written
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr(app_config, "_RUNTIME_ENV_LOADED", False)
    monkeypatch.setattr(app_config, "_runtime_env_path", lambda: runtime_env)
    monkeypatch.setattr(app_config, "_key_files", lambda: [])
    return runtime_env


def keyed_config(db_path: Path, encryption_key_env: str = "CREDIT_APP_ENCRYPTION_KEY"):
    return app_config.AppConfig(
        database=app_config.DatabaseConfig(
            path=str(db_path), key_env="CREDIT_APP_DB_KEY", allow_sqlite_fallback=True
        ),
        encryption=app_config.EncryptionConfig(key_env=encryption_key_env),
        logging=app_config.LoggingConfig(),
        credit=app_config.CreditConfig(),
    )


def test_get_required_env_loads_from_local_env_file(monkeypatch, no_keys, tmp_path: Path) -> None:
    env_file = tmp_path / ".env.local"
    env_file.write_text(
        "CREDIT_APP_DB_KEY='db-from-file'\nexport CREDIT_APP_ENCRYPTION_KEY=\"enc-from-file\"\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(app_config, "_key_files", lambda: [env_file])

    assert app_config.get_required_env("CREDIT_APP_DB_KEY") == "db-from-file"
    assert app_config.get_required_env("CREDIT_APP_ENCRYPTION_KEY") == "enc-from-file"


def test_environment_wins_over_key_file(monkeypatch, no_keys, tmp_path: Path) -> None:
    env_file = tmp_path / ".env.local"
    env_file.write_text("$env:CREDIT_APP_DB_KEY='from-file'\n", encoding="utf-8")
    monkeypatch.setattr(app_config, "_key_files", lambda: [env_file])
    monkeypatch.setenv("CREDIT_APP_DB_KEY", "from-env")

    assert app_config.get_required_env("CREDIT_APP_DB_KEY") == "from-env"


def test_get_required_env_does_not_generate_keys(no_keys) -> None:
    with pytest.raises(ConfigurationError, match="CREDIT_APP_DB_KEY"):
        app_config.get_required_env("CREDIT_APP_DB_KEY")

    assert not no_keys.exists()


def test_keys_are_generated_for_a_new_database(no_keys, tmp_path: Path) -> None:
    app_config.ensure_runtime_keys(keyed_config(tmp_path / "new.db"))

    db_key = os.environ["CREDIT_APP_DB_KEY"]
    enc_key = os.environ["CREDIT_APP_ENCRYPTION_KEY"]
    content = no_keys.read_text(encoding="utf-8")
    assert f"CREDIT_APP_DB_KEY='{db_key}'" in content
    assert f"CREDIT_APP_ENCRYPTION_KEY='{enc_key}'" in content


def test_generated_keys_use_configured_names(no_keys, tmp_path: Path) -> None:
    app_config.ensure_runtime_keys(keyed_config(tmp_path / "new.db", encryption_key_env="LEDGER_KEY"))

    assert os.environ["LEDGER_KEY"]
    assert "LEDGER_KEY=" in no_keys.read_text(encoding="utf-8")


def test_missing_keys_with_existing_database_fail(no_keys, tmp_path: Path) -> None:
    db_path = tmp_path / "credit_app.db"
    db_path.write_bytes(b"")

    with pytest.raises(ConfigurationError, match="Runtime key file is missing"):
        app_config.ensure_runtime_keys(keyed_config(db_path))

    assert not no_keys.exists()


def test_present_keys_leave_existing_database_alone(monkeypatch, no_keys, tmp_path: Path) -> None:
    db_path = tmp_path / "credit_app.db"
    db_path.write_bytes(b"")
    monkeypatch.setenv("CREDIT_APP_DB_KEY", "db")
    monkeypatch.setenv("CREDIT_APP_ENCRYPTION_KEY", "enc")

    app_config.ensure_runtime_keys(keyed_config(db_path))

    assert not no_keys.exists()


def test_load_config_reads_sections_and_defaults(tmp_path: Path) -> None:
    path = tmp_path / "app.yaml"
    path.write_text(
        "db:\n  path: data/credit.db\n  allow_sqlite_fallback: true\n"
        "encryption:\n  key_env: MY_KEY\n"
        "credit:\n  max_installments: 24\n",
        encoding="utf-8",
    )

    config = app_config.load_config(path)

    assert config.database.path == "data/credit.db"
    assert config.database.key_env == "CREDIT_APP_DB_KEY"
    assert config.database.allow_sqlite_fallback is True
    assert config.encryption.key_env == "MY_KEY"
    assert config.logging.level == "INFO"
    assert config.credit.max_first_installment_months == 3
    assert config.credit.min_installments == 1
    assert config.credit.max_installments == 24


def test_load_config_rejects_missing_file_and_sections(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        app_config.load_config(tmp_path / "absent.yaml")

    path = tmp_path / "app.yaml"
    path.write_text("db:\n  path: x.db\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="encryption"):
        app_config.load_config(path)


def test_config_path_from_environment(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CREDIT_APP_CONFIG_PATH", str(tmp_path / "custom.yaml"))

    assert app_config.resolve_default_config_path() == tmp_path / "custom.yaml"
