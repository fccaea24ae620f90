"""ASCII DXF (AC1009 / R12) serialisation of enclosure cut sheets.

One drawing unit is one inch. Each panel becomes four ``LINE`` entities on the
``PANELS`` layer, round cutouts become ``CIRCLE`` entities and slot cutouts
``LINE`` rectangles on ``CUTOUTS``, and notes become ``TEXT`` entities.
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import ezdxf
from ezdxf.document import Drawing

from ..errors import ExportError
from .panels import Cutout, PanelSet

logger = logging.getLogger(__name__)

DXF_VERSION = "R12"
DXF_ENCODING = "cp1252"
PANEL_LAYER = "PANELS"
CUTOUT_LAYER = "CUTOUTS"
LAYER_COLOURS = {PANEL_LAYER: 4, CUTOUT_LAYER: 1, "NOTES": 7, "LABELS": 3}


def _closed_outline(points: Sequence[tuple[float, float]]) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    return [(points[i], points[(i + 1) % len(points)]) for i in range(len(points))]


def _rect_points(cutout: Cutout) -> list[tuple[float, float]]:
    assert cutout.width_in is not None and cutout.height_in is not None
    half_w = cutout.width_in / 2.0
    half_h = cutout.height_in / 2.0
    x, y = cutout.center_x, cutout.center_y
    return [(x - half_w, y - half_h), (x + half_w, y - half_h), (x + half_w, y + half_h), (x - half_w, y + half_h)]


def build_document(panel_set: PanelSet) -> Drawing:
    """Return an in-memory DXF document for ``panel_set``."""

    doc = ezdxf.new(DXF_VERSION)
    for name, colour in LAYER_COLOURS.items():
        doc.layers.new(name, dxfattribs={"color": colour})
    msp = doc.modelspace()

    for panel in panel_set.panels:
        for start, end in _closed_outline(panel.corners()):
            msp.add_line(start, end, dxfattribs={"layer": PANEL_LAYER})

    for cutout in panel_set.cutouts:
        if cutout.kind == "circle":
            assert cutout.radius_in is not None
            msp.add_circle((cutout.center_x, cutout.center_y), cutout.radius_in, dxfattribs={"layer": CUTOUT_LAYER})
        elif cutout.kind == "rect":
            for start, end in _closed_outline(_rect_points(cutout)):
                msp.add_line(start, end, dxfattribs={"layer": CUTOUT_LAYER})
        else:
            raise ExportError(f"Unsupported cutout kind: {cutout.kind!r}")

    for note in panel_set.notes:
        msp.add_text(
            note.text,
            height=note.height_in,
            dxfattribs={"layer": note.layer, "insert": (note.x, note.y)},
        )

    return doc


def panels_to_dxf(panel_set: PanelSet) -> str:
    """Serialise ``panel_set`` to ASCII DXF text."""

    try:
        doc = build_document(panel_set)
        stream = io.StringIO()
        doc.write(stream)
    except ezdxf.DXFError as exc:
        raise ExportError(f"Failed to build DXF drawing: {exc}") from exc
    return stream.getvalue()


def write_cut_sheet(path: str | os.PathLike[str], panel_set: PanelSet) -> Path:
    """Write the cut sheet to ``path`` atomically and return the resolved path.

    The drawing is written to a temporary file in the target directory and
    moved into place, so a failed export never leaves a partial file behind.
    """

    target = Path(path)
    text = panels_to_dxf(panel_set)
    tmp_name: str | None = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=DXF_ENCODING,
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    except (OSError, UnicodeEncodeError) as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(f"Failed to write cut sheet to {target}: {exc}") from exc

    logger.info("Cut sheet written to %s", target)
    return target.resolve()


__all__ = ["DXF_VERSION", "build_document", "panels_to_dxf", "write_cut_sheet"]
