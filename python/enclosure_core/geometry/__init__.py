"""Cut-sheet panel geometry and DXF export."""

from .dxf import panels_to_dxf, write_cut_sheet
from .panels import Cutout, Panel, PanelSet, TextNote, generate_panels

__all__ = [
    "Panel",
    "Cutout",
    "TextNote",
    "PanelSet",
    "generate_panels",
    "panels_to_dxf",
    "write_cut_sheet",
]
