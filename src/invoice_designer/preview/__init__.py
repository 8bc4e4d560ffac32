"""Wireframe previews of designs."""

from .wireframe import render_wireframe, save_wireframe

__all__ = ["render_wireframe", "save_wireframe"]
