"""Unit generation: naming, dependencies, commands and rendering."""

from podunit.generator.orchestrator import UnitGenerator
from podunit.generator.render import render_unit

__all__ = [
    "UnitGenerator",
    "render_unit",
]
