"""JSON schema helpers describing engine request/response contracts.

These helpers provide lightweight JSON Schema v2020-12 documents for the
enclosure engine and the cut-sheet generator so other consumers (FastAPI
gateway, CLI, form front-ends) share one contract without duplicating it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import MISSING, fields, is_dataclass
from enum import Enum
from types import UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

from .drivers import BoxParams, DriverParams, EnclosureMode, PortGeometry
from .geometry.panels import Cutout, Panel, TextNote

SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"


def dataclass_schema(
    cls: type[Any],
    *,
    field_overrides: Mapping[str, Mapping[str, Any]] | None = None,
    exclude: Iterable[str] = (),
) -> dict[str, Any]:
    """Return a JSON schema describing the given dataclass."""

    if not is_dataclass(cls):  # pragma: no cover
        raise TypeError(f"{cls!r} is not a dataclass")

    overrides: Mapping[str, Mapping[str, Any]] | None = field_overrides or _DATACLASS_OVERRIDES.get(cls)
    type_hints = get_type_hints(cls)
    skipped = set(exclude)

    properties: dict[str, dict[str, Any]] = {}
    required: list[str] = []

    for field in fields(cls):
        if field.name in skipped:
            continue
        field_type = type_hints.get(field.name, field.type)
        properties[field.name] = _schema_for_type(field_type)
        if field.default is MISSING and field.default_factory is MISSING:
            required.append(field.name)

    schema_doc: dict[str, Any] = {
        "title": cls.__name__,
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": required,
    }

    if overrides:
        for name, override in overrides.items():
            prop = properties.get(name)
            if not prop:
                continue
            _apply_override(prop, override)

    return schema_doc


def enclosure_request_schema() -> dict[str, Any]:
    """Return the JSON schema describing an engine calculation request."""

    return {
        "$schema": SCHEMA_DRAFT,
        "title": "EnclosureCalculationRequest",
        "type": "object",
        "additionalProperties": False,
        "required": ["mode", "driver", "box"],
        "properties": {
            "mode": _schema_for_type(EnclosureMode),
            "driver": dataclass_schema(DriverParams),
            "box": dataclass_schema(BoxParams, exclude=("mode",)),
        },
    }


def enclosure_response_schema() -> dict[str, Any]:
    """Return the JSON schema for the engine result payload."""

    nullable_number = {"anyOf": [{"type": "number"}, {"type": "null"}]}
    properties: dict[str, dict[str, Any]] = {
        "mode": _schema_for_type(EnclosureMode),
        "volume_l": _positive_number_schema("Net internal volume (L)"),
        "tuning_hz": dict(nullable_number, description="Vent tuning (Fb); null for sealed boxes."),
        "system_resonance_hz": dict(nullable_number, description="Sealed system resonance (Fc)."),
        "qtc": dict(nullable_number, description="Sealed system total Q."),
        "port_length_cm": dict(nullable_number, description="Physical vent length (cm)."),
        "port_area_m2": {"type": "number", "minimum": 0.0},
        "sd_m2": {"type": "number", "minimum": 0.0},
        "f3_hz": dict(nullable_number, description="Lower -3 dB point of the SPL curve."),
        "frequency_hz": _number_array_schema(
            title="Frequency bins (Hz)",
            min_items=2,
            description="Shared, strictly increasing sweep axis.",
        ),
        "spl_db": _number_array_schema(title="Sound pressure level (dB)", min_items=2),
        "port_velocity_ms": _number_array_schema(title="Port air velocity (m/s)", min_items=2),
        "cone_excursion_m": _number_array_schema(title="Cone excursion (m)", min_items=2),
        "max_port_velocity_ms": {"type": "number"},
        "max_excursion_m": {"type": "number"},
        "warnings": {"type": "array", "items": {"type": "string"}},
        "warning_codes": {"type": "array", "items": {"type": "string"}},
    }
    return {
        "$schema": SCHEMA_DRAFT,
        "title": "EnclosureCalculationResponse",
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": list(properties),
    }


def panels_response_schema() -> dict[str, Any]:
    """Return the JSON schema for a generated panel set."""

    dims = {
        "type": "array",
        "items": {"type": "number", "exclusiveMinimum": 0.0},
        "minItems": 3,
        "maxItems": 3,
    }
    return {
        "$schema": SCHEMA_DRAFT,
        "title": "PanelSetResponse",
        "type": "object",
        "additionalProperties": False,
        "required": [
            "panels",
            "cutouts",
            "notes",
            "internal_dims_in",
            "outer_dims_in",
            "wall_thickness_in",
            "spacing_in",
            "total_area_in2",
        ],
        "properties": {
            "panels": {"type": "array", "items": dataclass_schema(Panel), "minItems": 6, "maxItems": 6},
            "cutouts": {"type": "array", "items": dataclass_schema(Cutout)},
            "notes": {"type": "array", "items": dataclass_schema(TextNote)},
            "internal_dims_in": dims,
            "outer_dims_in": dict(dims),
            "wall_thickness_in": {"type": "number", "minimum": 0.0},
            "spacing_in": {"type": "number", "minimum": 0.0},
            "total_area_in2": {"type": "number", "exclusiveMinimum": 0.0},
        },
    }


def enclosure_schema() -> dict[str, dict[str, Any]]:
    return {
        "request": enclosure_request_schema(),
        "response": enclosure_response_schema(),
    }


def panels_schema() -> dict[str, dict[str, Any]]:
    return {
        "request": enclosure_request_schema(),
        "response": panels_response_schema(),
    }


def enclosure_json_schemas() -> dict[str, dict[str, dict[str, Any]]]:
    """Return a catalog of request/response schemas keyed by contract name."""

    return {
        "enclosure": enclosure_schema(),
        "panels": panels_schema(),
    }


def _schema_for_type(tp: Any) -> dict[str, Any]:
    origin = get_origin(tp)

    if origin is None:
        if tp in (float,):
            return {"type": "number"}
        if tp in (int,):
            return {"type": "integer"}
        if tp in (str,):
            return {"type": "string"}
        if tp in (bool,):
            return {"type": "boolean"}
        if tp is type(None):
            return {"type": "null"}
        if isinstance(tp, type) and issubclass(tp, Enum):
            return {"type": "string", "enum": [member.value for member in tp]}
        if isinstance(tp, type) and is_dataclass(tp):
            return dataclass_schema(tp)
        return {}

    if origin in (list, Sequence, Iterable):
        args = get_args(tp)
        item_type = args[0] if args else Any
        return {
            "type": "array",
            "items": _schema_for_type(item_type) or {},
        }

    if origin is tuple:
        args = get_args(tp)
        if len(args) == 2 and args[1] is Ellipsis:
            return {
                "type": "array",
                "items": _schema_for_type(args[0]) or {},
            }
        return {
            "type": "array",
            "prefixItems": [_schema_for_type(arg) or {} for arg in args],
            "items": False,
        }

    if origin in (dict, Mapping):
        args = get_args(tp)
        key_schema = _schema_for_type(args[0]) if args else {"type": "string"}
        value_schema = _schema_for_type(args[1]) if len(args) > 1 else {}
        return {
            "type": "object",
            "propertyNames": key_schema or {"type": "string"},
            "additionalProperties": value_schema or {},
        }

    if origin is Union or origin is UnionType:
        options = [_schema_for_type(arg) for arg in get_args(tp)]
        options = [opt for opt in options if opt]
        if not options:
            return {}
        if len(options) == 1:
            return options[0]
        return {"anyOf": options}

    return {}


def _number_array_schema(
    *,
    title: str | None = None,
    min_items: int = 0,
    description: str | None = None,
) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": "array",
        "items": {"type": "number"},
    }
    if min_items:
        schema["minItems"] = min_items
    if title:
        schema["title"] = title
    if description:
        schema["description"] = description
    return schema


def _positive_number_schema(title: str | None = None, *, description: str | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": "number",
        "exclusiveMinimum": 0.0,
    }
    if title:
        schema["title"] = title
    if description:
        schema["description"] = description
    return schema


def _apply_override(schema: dict[str, Any], override: Mapping[str, Any]) -> None:
    if "anyOf" in schema:
        for option in schema["anyOf"]:
            if option.get("type") == "null":
                continue
            option.update(override)
    else:
        schema.update(override)


_DRIVER_FIELD_OVERRIDES: dict[str, dict[str, Any]] = {
    "fs_hz": {"exclusiveMinimum": 0.0},
    "qts": {"exclusiveMinimum": 0.0},
    "vas_l": {"exclusiveMinimum": 0.0},
    "sd_m2": {"minimum": 0.0},
    "xmax_m": {"minimum": 0.0},
    "re_ohm": {"exclusiveMinimum": 0.0},
    "le_h": {"minimum": 0.0},
    "qes": {"exclusiveMinimum": 0.0},
    "bl_t_m": {"exclusiveMinimum": 0.0},
}

_BOX_FIELD_OVERRIDES: dict[str, dict[str, Any]] = {
    "volume_l": {"exclusiveMinimum": 0.0},
    "tuning_hz": {"exclusiveMinimum": 0.0},
    "port_length_cm": {"minimum": 0.0},
    "wall_thickness_in": {"minimum": 0.0},
    "width_in": {"exclusiveMinimum": 0.0},
    "height_in": {"exclusiveMinimum": 0.0},
    "depth_in": {"exclusiveMinimum": 0.0},
    "chamber_ratio": {"exclusiveMinimum": 0.0},
    "leakage_q": {"exclusiveMinimum": 0.0},
}

_PORT_FIELD_OVERRIDES: dict[str, dict[str, Any]] = {
    "diameter_m": {"exclusiveMinimum": 0.0},
    "count": {"minimum": 1},
    "slot_width_m": {"exclusiveMinimum": 0.0},
    "slot_height_m": {"exclusiveMinimum": 0.0},
}

_DATACLASS_OVERRIDES: dict[type[Any], dict[str, dict[str, Any]]] = {
    DriverParams: _DRIVER_FIELD_OVERRIDES,
    BoxParams: _BOX_FIELD_OVERRIDES,
    PortGeometry: _PORT_FIELD_OVERRIDES,
}


__all__ = [
    "dataclass_schema",
    "enclosure_request_schema",
    "enclosure_response_schema",
    "panels_response_schema",
    "enclosure_schema",
    "panels_schema",
    "enclosure_json_schemas",
]
