"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from schema_pruner.configuration.loader import ConfigurationError, load_configuration
from schema_pruner.reachability import FilterRequest


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def _schema_dir(tmp_path: Path) -> Path:
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    _write_file(schemas / "shop10.yaml", "namespaces: {}\n")
    _write_file(schemas / "shop2.yaml", "namespaces: {}\n")
    return schemas


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    _schema_dir(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schema:
  paths: schemas
filter:
  namespace: shop
  types: Order
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.schema.paths == ((tmp_path / "schemas").resolve(),)
    assert [path.name for path in configuration.schema.files] == ["shop2.yaml", "shop10.yaml"]
    assert configuration.filter.requests == (FilterRequest("shop", ("Order",)),)
    assert configuration.output.path is None
    assert configuration.output.format == "yaml"


def test_loads_json_configuration_with_several_requests_and_output(tmp_path: Path) -> None:
    schemas = _schema_dir(tmp_path)
    config_path = _write_file(
        tmp_path / "config.json",
        json.dumps(
            {
                "schema": {"paths": [str(schemas / "shop2.yaml"), "schemas/shop10.yaml"]},
                "filter": [
                    {"namespace": "shop", "types": ["Order", "Refund"]},
                    {"namespace": " billing ", "types": ["Invoice"]},
                ],
                "output": {"path": "out/pruned.json"},
            }
        ),
    )

    configuration = load_configuration(config_path)

    assert [path.name for path in configuration.schema.files] == ["shop2.yaml", "shop10.yaml"]
    assert configuration.filter.requests == (
        FilterRequest("shop", ("Order", "Refund")),
        FilterRequest("billing", ("Invoice",)),
    )
    assert configuration.output.path == (tmp_path / "out" / "pruned.json").resolve()
    assert configuration.output.format == "json"


def test_explicit_output_format_wins_over_suffix(tmp_path: Path) -> None:
    _schema_dir(tmp_path)
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
schema: {paths: [schemas]}
filter: {namespace: shop, types: [Order]}
output: {path: pruned.json, format: YAML}
""",
    )

    assert load_configuration(config_path).output.format == "yaml"


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- a\n- b\n", "Configuration root must be a mapping"),
        ("filter: {namespace: shop, types: [A]}\n", "Configuration section 'schema' is required"),
        ("schema: {paths: []}\nfilter: {namespace: s, types: [A]}\n", "at least one file"),
        ("schema: {paths: [missing]}\nfilter: {namespace: s, types: [A]}\n", "not found"),
        ("schema: {paths: [schemas]}\n", "Configuration section 'filter' is required"),
        ("schema: {paths: [schemas]}\nfilter: []\n", "non-empty list"),
        ("schema: {paths: [schemas]}\nfilter: {types: [A]}\n", "filter\\[0\\].namespace"),
        ("schema: {paths: [schemas]}\nfilter: {namespace: s}\n", "at least one type"),
        ("schema: {paths: [schemas]}\nfilter: {namespace: s, types: [1]}\n", "entries must be"),
        (
            "schema: {paths: [schemas]}\nfilter: {namespace: s, types: [A]}\n"
            "output: {format: xml}\n",
            "output.format must be one of",
        ),
        ("schema: [unclosed\n", "Failed to parse"),
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, contents: str, message: str) -> None:
    _schema_dir(tmp_path)
    config_path = _write_file(tmp_path / "config.yaml", contents)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)


def test_schema_directory_without_schema_files_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "empty").mkdir()
    config_path = _write_file(
        tmp_path / "config.yaml",
        "schema: {paths: [empty]}\nfilter: {namespace: s, types: [A]}\n",
    )

    with pytest.raises(ConfigurationError, match="did not match any schema files"):
        load_configuration(config_path)
