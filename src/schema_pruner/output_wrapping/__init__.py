"""Output wrapping exports."""

from .output_wrapper import (
    DEFAULT_DEPENDENCY,
    DEFAULT_LINT,
    DEFAULT_WRAPPER,
    WrapOptions,
    WrapperNotFoundError,
    builtin_wrapper_names,
    load_wrapper,
    wrap_output,
)

__all__ = [
    "DEFAULT_DEPENDENCY",
    "DEFAULT_LINT",
    "DEFAULT_WRAPPER",
    "WrapOptions",
    "WrapperNotFoundError",
    "builtin_wrapper_names",
    "load_wrapper",
    "wrap_output",
]
