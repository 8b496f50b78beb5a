import json
from pathlib import Path

import pytest

from strukt.cli import main

MODELS_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "models"


def test_cli_draws_model(tmp_path, capsys):
    out = tmp_path / "doc" / "architecture.json"

    main(["--model", str(MODELS_DIR / "shop"), "--out", str(out)])

    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["name"] == "Shop"
    assert doc["description"] == "Online shop architecture"
    assert "warning: " in capsys.readouterr().err


def test_cli_overrides(tmp_path):
    out = tmp_path / "ws.json"

    main(
        [
            "--model", str(MODELS_DIR / "warnings_only.yaml"),
            "--out", str(out),
            "--name", "Custom",
            "--description", "Overridden",
            "--rank-direction", "TopBottom",
        ]
    )

    doc = json.loads(out.read_text(encoding="utf-8"))
    assert doc["name"] == "Custom"
    assert doc["description"] == "Overridden"
    assert doc["model"]["people"][0]["name"] == "Alice"


def test_cli_no_implied(tmp_path):
    out = tmp_path / "ws.json"

    main(["--model", str(MODELS_DIR / "shop"), "--out", str(out), "--no-implied"])

    doc = json.loads(out.read_text(encoding="utf-8"))
    rels = [
        r
        for person in doc["model"]["people"]
        for r in person.get("relationships", [])
    ]
    assert rels
    assert all("linkedRelationshipId" not in r for r in rels)


def test_cli_fails_on_errors(tmp_path, capsys):
    out = tmp_path / "ws.json"

    with pytest.raises(SystemExit) as exc:
        main(["--model", str(MODELS_DIR / "invalid.yaml"), "--out", str(out)])

    assert exc.value.code == 2
    assert "error: " in capsys.readouterr().err
    assert not out.exists()


def test_cli_strict_fails_on_warnings(tmp_path):
    out = tmp_path / "ws.json"

    with pytest.raises(SystemExit) as exc:
        main(["--model", str(MODELS_DIR / "warnings_only.yaml"), "--out", str(out), "--strict"])

    assert exc.value.code == 2
    assert not out.exists()
