from __future__ import annotations

from pathlib import Path

import generate_keys
from credit_app.core import config as app_config
from credit_app.core.crypto import CryptoService


def test_written_keys_are_loadable(monkeypatch, tmp_path: Path) -> None:
    target = tmp_path / "config" / "runtime.env"

    assert generate_keys.main(["--write-env", str(target), "--format", "shell-export"]) == 0

    for name in ("CREDIT_APP_DB_KEY", "CREDIT_APP_ENCRYPTION_KEY"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr(app_config, "_RUNTIME_ENV_LOADED", False)
    monkeypatch.setattr(app_config, "_key_files", lambda: [target])
    key = app_config.get_required_env("CREDIT_APP_ENCRYPTION_KEY")
    assert CryptoService.from_base64_key(key).key


def test_existing_file_needs_force(tmp_path: Path) -> None:
    target = tmp_path / "runtime.env"
    target.write_text("keep\n", encoding="utf-8")

    assert generate_keys.main(["--write-env", str(target)]) == 1
    assert target.read_text(encoding="utf-8") == "keep\n"

    assert generate_keys.main(["--write-env", str(target), "--force"]) == 0
    assert "CREDIT_APP_DB_KEY=" in target.read_text(encoding="utf-8")


def test_powershell_lines_go_to_stdout(capsys) -> None:
    generate_keys.main(["--format", "powershell", "--stdout"])

    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("$env:")]
    assert [line.split("=", 1)[0] for line in lines] == [
        "$env:CREDIT_APP_DB_KEY",
        "$env:CREDIT_APP_ENCRYPTION_KEY",
    ]
