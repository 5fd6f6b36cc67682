import json
import logging
from pathlib import Path

import yaml

from keyfixtures.cli import main


def test_cli_writes_yaml_table(tmp_path: Path) -> None:
    output = tmp_path / "keymap.yaml"
    code = main(
        [
            "--format", "yaml",
            "--output", str(output),
            "--algorithm", "ed25519",
            "--name", "example.com",
            "--name", "acme.com/services",
        ]
    )
    assert code == 0
    document = yaml.safe_load(output.read_text())
    assert list(document["keys"]) == ["example.com", "acme.com/services"]


def test_cli_flags_override_config_file(tmp_path: Path) -> None:
    config = tmp_path / "keyfixtures.json"
    config.write_text(
        json.dumps(
            {
                "names": ["coreos.com", "acme.com"],
                "format": "go",
                "output": str(tmp_path / "from-config.go"),
                "key": {"algorithm": "ed25519"},
            }
        )
    )
    output = tmp_path / "override.go"
    code = main(["--config", str(config), "--output", str(output), "--go-package", "fixtures", "--no-self-check"])
    assert code == 0
    text = output.read_text()
    assert "package fixtures" in text
    assert '"coreos.com": &KeyDetails{' in text
    assert not (tmp_path / "from-config.go").exists()


def test_cli_reports_failure_with_exit_code(tmp_path: Path) -> None:
    output = tmp_path / "keymap.py"
    code = main(["--output", str(output), "--algorithm", "ed25519", "--name", "a.com", "--name", "a.com"])
    assert code == 1
    assert not output.exists()


def test_cli_rejects_bad_config(tmp_path: Path) -> None:
    config = tmp_path / "keyfixtures.yaml"
    config.write_text("colour: blue\n")
    assert main(["--config", str(config)]) == 1
    assert main(["--config", str(tmp_path / "missing.json")]) == 1


def test_cli_reports_malformed_key_settings(tmp_path: Path) -> None:
    scalar = tmp_path / "scalar-key.json"
    scalar.write_text(json.dumps({"key": 5}))
    null_size = tmp_path / "null-size.yaml"
    null_size.write_text("key:\n  key_size: null\n")
    assert main(["--config", str(scalar)]) == 1
    assert main(["--config", str(null_size)]) == 1


def test_cli_writes_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "keyfixtures.log"
    output = tmp_path / "keymap.py"
    code = main(["--output", str(output), "--algorithm", "ed25519", "--name", "coreos.com", "--log-file", str(log_file)])
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert code == 0
    assert f"Wrote 1 key(s) to {output}" in log_file.read_text()
