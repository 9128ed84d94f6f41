"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-pruner.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Filter configuration template for schema-pruner.
# Replace every <REQUIRED> placeholder before running filter or inspect.
# Uncomment <OPTIONAL> placeholders only when your setup needs them.

schema:
  # Schema files or directories, relative to this file.
  # Directories are read non-recursively in natural filename order.
  paths:
    - "<REQUIRED>"

filter:
  # One entry set per top-level namespace; closures of all entries are merged.
  # A namespace missing from the loaded schema is skipped, a missing type is an error.
  - namespace: "<REQUIRED>"
    types:
      - "<REQUIRED>"

# output:
#   # Pruned schema document; printed to stdout when no path is set.
#   path: "<OPTIONAL>"
#   # yaml or json (inferred from a .json path when omitted).
#   format: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML filter configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder filter configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
