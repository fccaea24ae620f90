"""Validation and unit normalisation for raw form input.

The raw mappings use the field names and units of the input forms:
Sd in cm², Xmax in mm, Le in mH, port dimensions in cm, panel dimensions and
wall thickness in inches. Values may be numbers or numeric text. The output is
the canonical :class:`DriverParams` / :class:`BoxParams` pair.
"""

from __future__ import annotations

from collections.abc import Mapping
from math import isfinite

from .drivers import (
    DEFAULT_SENSITIVITY_DB,
    DEFAULT_WALL_THICKNESS_IN,
    BoxParams,
    DriverParams,
    EnclosureMode,
    PortGeometry,
)
from .errors import ValidationError
from .units import cm2_to_m2, cm_to_m, mh_to_h, mm_to_m

REQUIRED_DRIVER_FIELDS = ("Fs", "Qts", "Vas")


def _parse_number(field: str, value: object) -> float | None:
    """Return ``value`` as a float, ``None`` when blank; raise on garbage."""

    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(field, "expected a number")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError as exc:
            raise ValidationError(field, f"expected a number, got {text!r}") from exc
    if not isfinite(number):
        raise ValidationError(field, "must be finite")
    return number


def _required_positive(raw: Mapping[str, object], field: str) -> float:
    value = _parse_number(field, raw.get(field))
    if value is None:
        raise ValidationError(field, "is required")
    if value <= 0:
        raise ValidationError(field, "must be greater than zero")
    return value


def _optional_non_negative(raw: Mapping[str, object], field: str) -> float | None:
    value = _parse_number(field, raw.get(field))
    if value is None:
        return None
    if value < 0:
        raise ValidationError(field, "must not be negative")
    return value


def _optional_positive(raw: Mapping[str, object], field: str) -> float | None:
    """Like :func:`_optional_non_negative` but treats zero as "not supplied"."""

    value = _optional_non_negative(raw, field)
    if value is None or value == 0:
        return None
    return value


def normalize_driver(raw: Mapping[str, object]) -> DriverParams:
    """Validate raw driver input and convert it to canonical SI units."""

    fs, qts, vas = (_required_positive(raw, field) for field in REQUIRED_DRIVER_FIELDS)

    sd_cm2 = _optional_non_negative(raw, "Sd") or 0.0
    xmax_mm = _optional_non_negative(raw, "Xmax") or 0.0
    le_mh = _optional_non_negative(raw, "Le")
    sensitivity = _parse_number("sensitivity", raw.get("sensitivity"))

    name = raw.get("name")
    return DriverParams(
        fs_hz=fs,
        qts=qts,
        vas_l=vas,
        sd_m2=cm2_to_m2(sd_cm2),
        xmax_m=mm_to_m(xmax_mm),
        re_ohm=_optional_positive(raw, "Re"),
        le_h=mh_to_h(le_mh) if le_mh is not None else None,
        qes=_optional_positive(raw, "Qes"),
        bl_t_m=_optional_positive(raw, "Bl"),
        sensitivity_db=sensitivity if sensitivity is not None else DEFAULT_SENSITIVITY_DB,
        name=str(name) if name else None,
    )


def normalize_port(raw: Mapping[str, object]) -> PortGeometry | None:
    """Build a :class:`PortGeometry` from cm inputs, or ``None`` when no vent is given."""

    diameter_cm = _optional_positive(raw, "portDiameter")
    slot_width_cm = _optional_positive(raw, "slotWidth")
    slot_height_cm = _optional_positive(raw, "slotHeight")
    count_value = _optional_positive(raw, "numPorts")
    count = int(count_value) if count_value is not None else 1
    if count_value is not None and count != count_value:
        raise ValidationError("numPorts", "must be a whole number")

    if diameter_cm is None and (slot_width_cm is None or slot_height_cm is None):
        return None
    return PortGeometry(
        diameter_m=cm_to_m(diameter_cm) if diameter_cm is not None else None,
        count=count,
        slot_width_m=cm_to_m(slot_width_cm) if slot_width_cm is not None else None,
        slot_height_m=cm_to_m(slot_height_cm) if slot_height_cm is not None else None,
    )


def normalize_box(mode: EnclosureMode | str, raw: Mapping[str, object]) -> BoxParams:
    """Validate raw box input. Blank or zero optional values are left for the solver."""

    enclosure_mode = EnclosureMode.parse(mode)
    wall = _optional_positive(raw, "wallThickness")
    return BoxParams(
        mode=enclosure_mode,
        volume_l=_optional_positive(raw, "volume"),
        tuning_hz=_optional_positive(raw, "tuning"),
        port=normalize_port(raw),
        port_length_cm=_optional_positive(raw, "portLength"),
        wall_thickness_in=wall if wall is not None else DEFAULT_WALL_THICKNESS_IN,
        width_in=_optional_positive(raw, "width"),
        height_in=_optional_positive(raw, "height"),
        depth_in=_optional_positive(raw, "depth"),
        chamber_ratio=_optional_positive(raw, "ratio"),
    )


__all__ = [
    "REQUIRED_DRIVER_FIELDS",
    "normalize_driver",
    "normalize_port",
    "normalize_box",
]
