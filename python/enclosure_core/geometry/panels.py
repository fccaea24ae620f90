"""Six-panel cut-sheet geometry for rectangular enclosures.

The internal volume is split into width, height and depth, either from
caller-supplied dimensions or from a fixed H:W:D aspect ratio. The panels are
then laid out in one row on the sheet. All coordinates are in inches on the
sheet, with the first panel's lower-left corner at the origin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..drivers import BoxParams, PortGeometry
from ..errors import ValidationError
from ..units import litres_to_cubic_inches, m2_to_cm2, m_to_inches

if TYPE_CHECKING:  # pragma: no cover
    from ..engine import EnclosureResult

ASPECT_RATIO_HWD = (1.0, 1.5, 2.0)
PANEL_SPACING_IN = 2.0
CUTOUT_RATIO = 0.93  # cutout diameter ≈ 0.93 * nominal driver size
SUMMARY_TEXT_HEIGHT_IN = 0.5
LABEL_TEXT_HEIGHT_IN = 0.4
PANEL_NAMES = ("Front", "Back", "Top", "Bottom", "Left", "Right")

# Upper cone-area bound (cm²) for each nominal driver size (inches).
DRIVER_SIZE_BANDS: tuple[tuple[float, float], ...] = (
    (150.0, 6.5),
    (250.0, 8.0),
    (400.0, 10.0),
    (600.0, 12.0),
    (900.0, 15.0),
)
LARGEST_DRIVER_IN = 18.0


@dataclass(slots=True, frozen=True)
class Panel:
    name: str
    width_in: float
    height_in: float
    origin_x: float
    origin_y: float = 0.0

    def area_in2(self) -> float:
        return self.width_in * self.height_in

    def corners(self) -> tuple[tuple[float, float], ...]:
        """Return the four corners counter-clockwise from the lower-left."""

        x, y = self.origin_x, self.origin_y
        return (
            (x, y),
            (x + self.width_in, y),
            (x + self.width_in, y + self.height_in),
            (x, y + self.height_in),
        )

    def to_dict(self) -> dict[str, float | str]:
        return {
            "name": self.name,
            "width_in": self.width_in,
            "height_in": self.height_in,
            "origin_x": self.origin_x,
            "origin_y": self.origin_y,
        }


@dataclass(slots=True, frozen=True)
class Cutout:
    """Hole on a panel; ``kind`` is ``"circle"`` or ``"rect"``, centred on (x, y)."""

    label: str
    panel: str
    kind: str
    center_x: float
    center_y: float
    diameter_in: float | None = None
    width_in: float | None = None
    height_in: float | None = None

    @property
    def radius_in(self) -> float | None:
        return self.diameter_in / 2.0 if self.diameter_in is not None else None

    def to_dict(self) -> dict[str, float | str | None]:
        return {
            "label": self.label,
            "panel": self.panel,
            "kind": self.kind,
            "center_x": self.center_x,
            "center_y": self.center_y,
            "diameter_in": self.diameter_in,
            "width_in": self.width_in,
            "height_in": self.height_in,
        }


@dataclass(slots=True, frozen=True)
class TextNote:
    text: str
    x: float
    y: float
    height_in: float
    layer: str = "NOTES"

    def to_dict(self) -> dict[str, float | str]:
        return {"text": self.text, "x": self.x, "y": self.y, "height_in": self.height_in, "layer": self.layer}


@dataclass(slots=True, frozen=True)
class PanelSet:
    """Panels, cutouts and notes making up one enclosure cut sheet."""

    panels: tuple[Panel, ...]
    cutouts: tuple[Cutout, ...]
    notes: tuple[TextNote, ...]
    internal_dims_in: tuple[float, float, float]
    """Internal (width, height, depth)."""

    outer_dims_in: tuple[float, float, float]
    """Outer (width, height, depth)."""

    wall_thickness_in: float
    spacing_in: float = PANEL_SPACING_IN

    def panel(self, name: str) -> Panel:
        for panel in self.panels:
            if panel.name == name:
                return panel
        raise KeyError(f"Unknown panel: {name}")

    def total_area_in2(self) -> float:
        return sum(panel.area_in2() for panel in self.panels)

    def internal_volume_l(self) -> float:
        w, h, d = self.internal_dims_in
        return w * h * d / litres_to_cubic_inches(1.0)

    def sheet_extent_in(self) -> tuple[float, float]:
        """Return the (width, height) of the bounding box of all panels."""

        right = max(p.origin_x + p.width_in for p in self.panels)
        top = max(p.origin_y + p.height_in for p in self.panels)
        return (right, top)

    def to_dict(self) -> dict[str, object]:
        return {
            "panels": [panel.to_dict() for panel in self.panels],
            "cutouts": [cutout.to_dict() for cutout in self.cutouts],
            "notes": [note.to_dict() for note in self.notes],
            "internal_dims_in": list(self.internal_dims_in),
            "outer_dims_in": list(self.outer_dims_in),
            "wall_thickness_in": self.wall_thickness_in,
            "spacing_in": self.spacing_in,
            "total_area_in2": self.total_area_in2(),
        }


def internal_dimensions(volume_l: float, explicit: tuple[float, float, float] | None = None) -> tuple[float, float, float]:
    """Return internal (width, height, depth) in inches for ``volume_l``.

    Explicit dimensions are used as given. Otherwise the volume is split along
    the H:W:D aspect ratio so that ``w * h * d`` equals the volume in cubic inches.
    """

    if explicit is not None:
        return explicit
    if volume_l <= 0:
        raise ValidationError("Vb", "volume must be positive to derive panel dimensions")
    ratio_h, ratio_w, ratio_d = ASPECT_RATIO_HWD
    scale = (litres_to_cubic_inches(volume_l) / (ratio_h * ratio_w * ratio_d)) ** (1.0 / 3.0)
    return (ratio_w * scale, ratio_h * scale, ratio_d * scale)


def nominal_driver_size_in(sd_m2: float) -> float | None:
    """Map cone area to a nominal driver size using the size-band table."""

    if sd_m2 <= 0:
        return None
    sd_cm2 = m2_to_cm2(sd_m2)
    for upper_cm2, size_in in DRIVER_SIZE_BANDS:
        if sd_cm2 < upper_cm2:
            return size_in
    return LARGEST_DRIVER_IN


def _layout_panels(width: float, height: float, depth: float, spacing: float) -> tuple[Panel, ...]:
    sizes = {
        "Front": (width, height),
        "Back": (width, height),
        "Top": (width, depth),
        "Bottom": (width, depth),
        "Left": (depth, height),
        "Right": (depth, height),
    }
    panels: list[Panel] = []
    cursor_x = 0.0
    for name in PANEL_NAMES:
        w, h = sizes[name]
        panels.append(Panel(name=name, width_in=w, height_in=h, origin_x=cursor_x))
        cursor_x += w + spacing
    return tuple(panels)


def _port_cutouts(port: PortGeometry, front: Panel, wall: float) -> list[Cutout]:
    count = max(port.count, 1)
    cutouts: list[Cutout] = []
    if port.is_round:
        assert port.diameter_m is not None
        diameter = m_to_inches(port.diameter_m)
        centre_y = front.origin_y + wall + diameter / 2.0 + 0.5
        for i in range(count):
            centre_x = front.origin_x + front.width_in * (i + 1) / (count + 1)
            cutouts.append(Cutout("port", front.name, "circle", centre_x, centre_y, diameter_in=diameter))
    elif port.is_slot:
        assert port.slot_width_m is not None and port.slot_height_m is not None
        slot_w = m_to_inches(port.slot_width_m)
        slot_h = m_to_inches(port.slot_height_m)
        gap = 1.0
        span = count * slot_w + (count - 1) * gap
        left = front.origin_x + (front.width_in - span) / 2.0
        centre_y = front.origin_y + wall + slot_h / 2.0
        for i in range(count):
            centre_x = left + slot_w / 2.0 + i * (slot_w + gap)
            cutouts.append(
                Cutout("port", front.name, "rect", centre_x, centre_y, width_in=slot_w, height_in=slot_h)
            )
    return cutouts


def _summary_text(result: EnclosureResult, wall: float) -> str:
    fb = f"{result.tuning_hz:.1f}Hz" if result.tuning_hz is not None else "-"
    return f"Vb={result.volume_l:.1f}L Fb={fb} t={wall:g}in"


def generate_panels(box: BoxParams, result: EnclosureResult) -> PanelSet:
    """Derive the six panels, cutouts and annotations for a solved enclosure."""

    wall = box.wall_thickness_in
    if wall < 0:
        raise ValidationError("wallThickness", "must not be negative")

    inner = internal_dimensions(result.volume_l, box.explicit_dimensions())
    outer = (inner[0] + 2 * wall, inner[1] + 2 * wall, inner[2] + 2 * wall)
    panels = _layout_panels(*outer, spacing=PANEL_SPACING_IN)
    front = panels[0]
    sheet_top = max(outer[1], outer[2])

    cutouts: list[Cutout] = []
    notes: list[TextNote] = []

    has_port = result.mode.is_vented and box.port is not None and box.port.area_m2() > 0
    nominal = nominal_driver_size_in(result.sd_m2)
    if nominal is not None:
        diameter = nominal * CUTOUT_RATIO
        centre_y = front.origin_y + front.height_in * (0.6 if has_port else 0.5)
        cutouts.append(
            Cutout(
                "driver",
                front.name,
                "circle",
                front.origin_x + front.width_in / 2.0,
                centre_y,
                diameter_in=round(diameter, 3),
            )
        )
        if diameter > min(inner[0], inner[1]):
            notes.append(
                TextNote(
                    f"Driver cutout {diameter:.2f}in exceeds the front baffle; set explicit dimensions",
                    0.0,
                    sheet_top + 8.0,
                    SUMMARY_TEXT_HEIGHT_IN,
                )
            )

    if has_port:
        assert box.port is not None
        cutouts.extend(_port_cutouts(box.port, front, wall))

    notes.insert(0, TextNote(_summary_text(result, wall), 0.0, sheet_top + 10.0, SUMMARY_TEXT_HEIGHT_IN))
    for panel in panels:
        notes.append(
            TextNote(
                f"{panel.name} ({panel.width_in:.1f} x {panel.height_in:.1f} in)",
                panel.origin_x,
                panel.origin_y - 1.5,
                LABEL_TEXT_HEIGHT_IN,
                layer="LABELS",
            )
        )

    return PanelSet(
        panels=panels,
        cutouts=tuple(cutouts),
        notes=tuple(notes),
        internal_dims_in=inner,
        outer_dims_in=outer,
        wall_thickness_in=wall,
    )


__all__ = [
    "ASPECT_RATIO_HWD",
    "PANEL_SPACING_IN",
    "CUTOUT_RATIO",
    "DRIVER_SIZE_BANDS",
    "Panel",
    "Cutout",
    "TextNote",
    "PanelSet",
    "internal_dimensions",
    "nominal_driver_size_in",
    "generate_panels",
]
