"""Driver and enclosure data models used across the enclosure engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from math import pi

from .errors import ValidationError
from .units import litres_to_m3, m2_to_cm2, m3_to_litres, m_to_mm

AIR_DENSITY = 1.2041  # kg/m^3 at 20°C
SPEED_OF_SOUND = 343.0  # m/s at 20°C
DEFAULT_SENSITIVITY_DB = 90.0
DEFAULT_WALL_THICKNESS_IN = 0.75


class EnclosureMode(str, Enum):
    """Closed set of supported enclosure alignments."""

    SEALED = "sealed"
    PORTED = "ported"
    BANDPASS4 = "bandpass4"
    BANDPASS6 = "bandpass6"

    @property
    def is_vented(self) -> bool:
        return self is not EnclosureMode.SEALED

    @property
    def is_bandpass(self) -> bool:
        return self in (EnclosureMode.BANDPASS4, EnclosureMode.BANDPASS6)

    @classmethod
    def parse(cls, value: str | EnclosureMode) -> EnclosureMode:
        """Resolve canonical values and the legacy UI labels ("Bandpass 4th", ...)."""

        if isinstance(value, EnclosureMode):
            return value
        key = str(value).strip().lower().replace(" ", "").replace("-", "").replace("_", "")
        key = key.replace("4th", "4").replace("6th", "6")
        aliases = {"vented": cls.PORTED, "bassreflex": cls.PORTED}
        for mode in cls:
            if mode.value == key:
                return mode
        if key in aliases:
            return aliases[key]
        raise ValidationError("mode", f"unsupported enclosure mode {value!r}")


# Default chamber ratio (Vb / Vas) and tuning multiple (Fb / Fs) for the bandpass
# alignments. These are coarse starting points, not optimised alignments.
BANDPASS_CHAMBER_RATIO: dict[EnclosureMode, float] = {
    EnclosureMode.BANDPASS4: 2.0,
    EnclosureMode.BANDPASS6: 3.0,
}
BANDPASS_TUNING_MULTIPLE: dict[EnclosureMode, float] = {
    EnclosureMode.BANDPASS4: 1.2,
    EnclosureMode.BANDPASS6: 1.5,
}


@dataclass(slots=True, frozen=True)
class DriverParams:
    """Thiele/Small parameter set in canonical units."""

    fs_hz: float
    """Free-air resonance frequency (Hz)."""

    qts: float
    """Total Q at fs (dimensionless)."""

    vas_l: float
    """Equivalent compliance volume (litres)."""

    sd_m2: float = 0.0
    """Effective piston area (square metres)."""

    xmax_m: float = 0.0
    """One-way linear excursion limit (metres)."""

    re_ohm: float | None = None
    """DC resistance of the voice coil (ohms)."""

    le_h: float | None = None
    """Voice-coil inductance (henries)."""

    qes: float | None = None
    """Electrical Q at fs."""

    bl_t_m: float | None = None
    """Force factor (tesla-metres)."""

    sensitivity_db: float = DEFAULT_SENSITIVITY_DB
    """Passband sensitivity (dB SPL @ 1 W / 1 m)."""

    name: str | None = None

    def qms(self) -> float | None:
        """Mechanical Q derived from Qts and Qes, when Qes is known."""

        if self.qes is None or self.qes <= 0:
            return None
        inv_qms = 1.0 / self.qts - 1.0 / self.qes
        if inv_qms <= 0:
            return None
        return 1.0 / inv_qms

    def displaced_volume_l(self) -> float:
        """Return the linear displacement volume Vd = Sd * Xmax in litres."""

        return m3_to_litres(self.sd_m2 * self.xmax_m)

    def to_dict(self) -> dict[str, float | str | None]:
        return {
            "name": self.name,
            "fs_hz": self.fs_hz,
            "qts": self.qts,
            "vas_l": self.vas_l,
            "sd_cm2": m2_to_cm2(self.sd_m2),
            "xmax_mm": m_to_mm(self.xmax_m),
            "re_ohm": self.re_ohm,
            "le_h": self.le_h,
            "qes": self.qes,
            "bl_t_m": self.bl_t_m,
            "sensitivity_db": self.sensitivity_db,
        }


@dataclass(slots=True, frozen=True)
class PortGeometry:
    """Round or slot vent. A diameter, when given, takes precedence over a slot."""

    diameter_m: float | None = None
    """Round port inner diameter (metres)."""

    count: int = 1
    """Number of identical ports."""

    slot_width_m: float | None = None
    """Slot port width (metres)."""

    slot_height_m: float | None = None
    """Slot port height (metres)."""

    @property
    def is_round(self) -> bool:
        return bool(self.diameter_m and self.diameter_m > 0)

    @property
    def is_slot(self) -> bool:
        return (
            not self.is_round
            and bool(self.slot_width_m and self.slot_width_m > 0)
            and bool(self.slot_height_m and self.slot_height_m > 0)
        )

    def single_area_m2(self) -> float:
        """Return the cross-sectional area of one port."""

        if self.is_round:
            assert self.diameter_m is not None
            return pi * (self.diameter_m / 2.0) ** 2
        if self.is_slot:
            assert self.slot_width_m is not None and self.slot_height_m is not None
            return self.slot_width_m * self.slot_height_m
        return 0.0

    def area_m2(self) -> float:
        """Return the combined cross-sectional area of all ports."""

        return self.single_area_m2() * max(self.count, 1)

    def to_dict(self) -> dict[str, float | int | None]:
        return {
            "diameter_m": self.diameter_m,
            "count": self.count,
            "slot_width_m": self.slot_width_m,
            "slot_height_m": self.slot_height_m,
            "area_m2": self.area_m2(),
        }


@dataclass(slots=True, frozen=True)
class BoxParams:
    """Partially specified enclosure; unset fields are solved by the engine."""

    mode: EnclosureMode
    """Enclosure alignment family."""

    volume_l: float | None = None
    """Net internal volume (litres). Solved when absent."""

    tuning_hz: float | None = None
    """Tuning frequency (Hz). Solved when absent for vented modes."""

    port: PortGeometry | None = None
    """Vent geometry, if any."""

    port_length_cm: float | None = None
    """Physical vent length (centimetres). Solved when absent and a port is given."""

    wall_thickness_in: float = DEFAULT_WALL_THICKNESS_IN
    """Panel material thickness (inches)."""

    width_in: float | None = None
    height_in: float | None = None
    depth_in: float | None = None
    """Explicit internal dimensions (inches); all three override the ratio split."""

    chamber_ratio: float | None = None
    """Bandpass chamber volume relative to Vas; defaults per mode."""

    leakage_q: float = 10.0
    """Quality factor representing box leakage/absorption losses."""

    def resolved_chamber_ratio(self) -> float | None:
        if not self.mode.is_bandpass:
            return None
        if self.chamber_ratio is not None and self.chamber_ratio > 0:
            return self.chamber_ratio
        return BANDPASS_CHAMBER_RATIO[self.mode]

    def port_area_m2(self) -> float:
        if self.port is None:
            return 0.0
        return self.port.area_m2()

    def explicit_dimensions(self) -> tuple[float, float, float] | None:
        """Return caller-supplied internal (width, height, depth) when all three are set."""

        dims = (self.width_in, self.height_in, self.depth_in)
        if any(d is None or d <= 0 for d in dims):
            return None
        return (float(dims[0]), float(dims[1]), float(dims[2]))  # type: ignore[arg-type]

    def volume_m3(self) -> float | None:
        if self.volume_l is None:
            return None
        return litres_to_m3(self.volume_l)

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "volume_l": self.volume_l,
            "tuning_hz": self.tuning_hz,
            "port": self.port.to_dict() if self.port is not None else None,
            "port_length_cm": self.port_length_cm,
            "wall_thickness_in": self.wall_thickness_in,
            "width_in": self.width_in,
            "height_in": self.height_in,
            "depth_in": self.depth_in,
            "chamber_ratio": self.resolved_chamber_ratio(),
            "leakage_q": self.leakage_q,
        }


@dataclass(slots=True, frozen=True)
class DriverPreset:
    """Named driver entry in the raw units the input forms use."""

    name: str
    raw: dict[str, float] = field(default_factory=dict)


# Units: Fs (Hz), Qts (-), Vas (L), Sd (cm^2), Xmax (mm), Re (ohm), Le (mH)
DRIVER_PRESETS: tuple[DriverPreset, ...] = (
    DriverPreset(
        "Example 12",
        {"Fs": 30.0, "Qts": 0.36, "Vas": 50.0, "Sd": 510.0, "Xmax": 14.0, "Re": 3.5, "Le": 1.9},
    ),
    DriverPreset(
        "Example 10",
        {"Fs": 34.0, "Qts": 0.42, "Vas": 32.0, "Sd": 360.0, "Xmax": 12.0, "Re": 3.6, "Le": 1.6},
    ),
)


def find_preset(name: str) -> DriverPreset:
    """Return the preset whose name matches ``name`` case-insensitively."""

    wanted = name.strip().lower()
    for preset in DRIVER_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    raise KeyError(f"Unknown driver preset: {name}")


__all__ = [
    "AIR_DENSITY",
    "SPEED_OF_SOUND",
    "DEFAULT_SENSITIVITY_DB",
    "DEFAULT_WALL_THICKNESS_IN",
    "EnclosureMode",
    "BANDPASS_CHAMBER_RATIO",
    "BANDPASS_TUNING_MULTIPLE",
    "DriverParams",
    "PortGeometry",
    "BoxParams",
    "DriverPreset",
    "DRIVER_PRESETS",
    "find_preset",
]
