"""Hypno pattern rendering engine."""

from hypno.engine.registry import stage, Stage, get_registry
from hypno.engine.context import RenderContext
from hypno.engine.compositor import Compositor, render
from hypno.engine.session import EditorSession

__all__ = [
    "stage",
    "Stage",
    "get_registry",
    "RenderContext",
    "Compositor",
    "render",
    "EditorSession",
]
