"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from click.testing import CliRunner
from schema_pruner.cli import cli, main

_SCHEMA = {
    "namespaces": {
        "shop": {
            "types": {
                "Order": {
                    "fields": [
                        {"name": "id", "type": "string", "id": 1},
                        {"name": "lines", "type": "Line", "rule": "repeated", "id": 2},
                    ]
                },
                "Line": {"fields": [{"name": "sku", "type": "catalog.Sku", "id": 1}]},
                "Wishlist": {"fields": [{"name": "sku", "type": "catalog.Sku", "id": 1}]},
            }
        },
        "catalog": {"types": {"Sku": {"fields": []}, "Brand": {"fields": []}}},
        "crm": {"types": {"Lead": {"fields": []}}},
    }
}


def _write_config(tmp_path: Path, *, types: list[str] | None = None) -> Path:
    schemas = tmp_path / "schemas"
    schemas.mkdir(exist_ok=True)
    (schemas / "all.json").write_text(json.dumps(_SCHEMA), encoding="utf-8")
    config = {
        "schema": {"paths": ["schemas"]},
        "filter": [{"namespace": "shop", "types": types or ["Order"]}],
    }
    path = tmp_path / "schema-pruner.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_filter_command_writes_pruned_document(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)
    output_path = tmp_path / "pruned.yaml"

    result = runner.invoke(
        cli, ["filter", "--config", str(config_path), "--output", str(output_path)]
    )

    assert result.exit_code == 0
    assert str(output_path.resolve()) in result.output
    assert "Line, Order" in result.output
    pruned = yaml.safe_load(output_path.read_text(encoding="utf-8"))
    assert list(pruned["namespaces"]) == ["shop", "catalog"]
    assert list(pruned["namespaces"]["shop"]["types"]) == ["Order", "Line"]
    assert list(pruned["namespaces"]["catalog"]["types"]) == ["Sku"]


def test_filter_command_prints_document_to_stdout_without_output(tmp_path: Path, capsys) -> None:
    config_path = _write_config(tmp_path, types=["Wishlist"])

    exit_code = main(["filter", "--config", str(config_path), "--format", "json"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert json.loads(captured.out) == {
        "namespaces": {
            "shop": {"types": {"Wishlist": _SCHEMA["namespaces"]["shop"]["types"]["Wishlist"]}},
            "catalog": {"types": {"Sku": {"fields": []}}},
        }
    }
    assert "Wishlist" in captured.err


def test_filter_command_dry_run_prints_document_and_skips_output(
    tmp_path: Path, capsys
) -> None:
    config_path = _write_config(tmp_path)
    output_path = tmp_path / "pruned.yaml"

    exit_code = main(
        ["filter", "--config", str(config_path), "--output", str(output_path), "--dry-run"]
    )
    captured = capsys.readouterr()

    assert exit_code == 0
    assert not output_path.exists()
    pruned = yaml.safe_load(captured.out)
    assert list(pruned["namespaces"]["shop"]["types"]) == ["Order", "Line"]
    assert "Line, Order" in captured.err


def test_filter_command_reports_missing_type(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path, types=["Order", "Refund"])
    output_path = tmp_path / "pruned.yaml"

    result = runner.invoke(
        cli, ["filter", "--config", str(config_path), "--output", str(output_path)]
    )

    assert result.exit_code != 0
    assert "Type 'Refund' not found in namespace 'shop'" in str(result.exception)
    assert not output_path.exists()


def test_inspect_command_renders_full_and_filtered_tree(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    full = runner.invoke(cli, ["inspect", "--config", str(config_path)])
    filtered = runner.invoke(cli, ["inspect", "--config", str(config_path), "--filtered"])

    assert full.exit_code == 0
    assert filtered.exit_code == 0
    assert "Namespace crm" in full.output
    assert "Message catalog.Brand" in full.output
    assert "Namespace crm" not in filtered.output
    assert "Message catalog.Brand" not in filtered.output
    assert "Message catalog.Sku" in filtered.output


def test_wrap_command_writes_wrapped_output(tmp_path: Path) -> None:
    runner = CliRunner()
    generated = tmp_path / "generated.js"
    generated.write_text("var $root = {};", encoding="utf-8")
    output_path = tmp_path / "dist" / "bundle.js"

    result = runner.invoke(
        cli,
        [
            "wrap",
            "--input",
            str(generated),
            "--wrapper",
            "commonjs",
            "--dependency",
            "protobufjs/light",
            "--lint",
            "",
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0
    wrapped = output_path.read_text(encoding="utf-8")
    assert wrapped.startswith('"use strict";')
    assert 'require("protobufjs/light")' in wrapped
    assert "var $root = {};" in wrapped


def test_wrap_command_reports_unknown_wrapper(tmp_path: Path) -> None:
    runner = CliRunner()
    generated = tmp_path / "generated.js"
    generated.write_text("var $root = {};", encoding="utf-8")

    result = runner.invoke(
        cli, ["wrap", "--input", str(generated), "--wrapper", str(tmp_path / "nope.js")]
    )

    assert result.exit_code != 0
    assert "nope.js" in str(result.exception)


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("schema-pruner.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "schema:" in content
        assert "filter:" in content
        assert "<REQUIRED>" in content
        assert str(output_path) in result.output


def test_generate_config_command_refuses_to_overwrite(tmp_path: Path) -> None:
    runner = CliRunner()
    existing = tmp_path / "schema-pruner.yaml"
    existing.write_text("keep", encoding="utf-8")

    result = runner.invoke(cli, ["generate-config", "--output", str(existing)])

    assert result.exit_code != 0
    assert "already exists" in str(result.exception)
    assert existing.read_text(encoding="utf-8") == "keep"
