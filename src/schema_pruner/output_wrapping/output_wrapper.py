"""Splicing generated code into wrapper templates."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

BUILTIN_WRAPPERS_DIR = Path(__file__).resolve().parent / "wrappers"
DEFAULT_WRAPPER = "default"
DEFAULT_DEPENDENCY = "protobufjs"
DEFAULT_LINT = (
    "eslint-disable block-scoped-var, id-length, no-control-regex, no-magic-numbers, "
    "no-prototype-builtins, no-redeclare, no-shadow, no-var, sort-vars"
)

_OUTPUT_PLACEHOLDER = re.compile(r"( *)\$OUTPUT;")
_LINE_START = re.compile(r"^", re.MULTILINE)
_LINE_ENDING = re.compile(r"\r?\n")


class WrapperNotFoundError(Exception):
    """Raised when neither a built-in nor a custom wrapper matches the requested name."""


@dataclass(frozen=True)
class WrapOptions:
    """Wrapper selection and placeholder values."""

    wrapper: str = DEFAULT_WRAPPER
    dependency: str | None = None
    lint: str | None = DEFAULT_LINT


def builtin_wrapper_names() -> tuple[str, ...]:
    return tuple(sorted(path.stem for path in BUILTIN_WRAPPERS_DIR.glob("*.js")))


def load_wrapper(name: str, cwd: Path | str | None = None) -> str:
    """Return the wrapper template text.

    Built-in wrappers are looked up by name first; anything else is treated as
    a path to a custom wrapper, relative to ``cwd`` (default: the working
    directory).

    Raises:
      WrapperNotFoundError: If no wrapper file can be read.
    """
    builtin = BUILTIN_WRAPPERS_DIR / f"{name}.js"
    if builtin.is_file():
        return builtin.read_text(encoding="utf-8")
    custom = Path(cwd) if cwd is not None else Path.cwd()
    custom = (custom / name).resolve()
    try:
        text = custom.read_text(encoding="utf-8")
    except OSError as exc:
        raise WrapperNotFoundError(
            f"Wrapper '{name}' is neither built in ({', '.join(builtin_wrapper_names())}) "
            f"nor a readable file: {custom}"
        ) from exc
    logger.debug("Using custom wrapper %s", custom)
    return text


def wrap_output(
    output: str, options: WrapOptions | None = None, *, cwd: Path | str | None = None
) -> str:
    """Splice ``output`` into the selected wrapper.

    ``$DEPENDENCY`` becomes the JSON string literal of the dependency name and
    the first ``$OUTPUT;`` is replaced by ``output``, each line indented like
    the placeholder. A lint comment is prepended unless ``lint`` is empty.
    """
    options = options or WrapOptions()
    template = load_wrapper(options.wrapper, cwd)
    template = template.replace("$DEPENDENCY", json.dumps(options.dependency or DEFAULT_DEPENDENCY))
    template = _OUTPUT_PLACEHOLDER.sub(
        lambda match: _indent_lines(output, match.group(1)), template, count=1
    )
    if options.lint:
        template = f"/*{options.lint}*/\n{template}"
    return _LINE_ENDING.sub("\n", template)


def _indent_lines(text: str, indent: str) -> str:
    if not indent:
        return text
    return _LINE_START.sub(indent, text)
