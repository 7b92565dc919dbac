"""
Drawing instruction projection for host paint surfaces.
"""

from .projector import CircleInstruction, ColorState, DrawList, LineInstruction, project

__all__ = ["CircleInstruction", "ColorState", "DrawList", "LineInstruction", "project"]
