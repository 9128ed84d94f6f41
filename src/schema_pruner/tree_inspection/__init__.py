"""Tree inspection exports."""

from .tree_rendering import pad, render_summary, render_tree

__all__ = ["pad", "render_summary", "render_tree"]
