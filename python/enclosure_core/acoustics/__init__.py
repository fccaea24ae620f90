"""Alignment solver and response-curve generator."""

from .alignment import Alignment, solve_alignment
from .response import DISPLACEMENT_SAFETY_FACTOR, ResponseCurves, generate_curves

__all__ = [
    "Alignment",
    "solve_alignment",
    "ResponseCurves",
    "generate_curves",
    "DISPLACEMENT_SAFETY_FACTOR",
]
