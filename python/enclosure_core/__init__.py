"""Public interface for the subwoofer enclosure design core."""

from .acoustics import (
    DISPLACEMENT_SAFETY_FACTOR,
    Alignment,
    ResponseCurves,
    generate_curves,
    solve_alignment,
)
from .diagnostics import evaluate_warnings
from .drivers import (
    DRIVER_PRESETS,
    BoxParams,
    DriverParams,
    DriverPreset,
    EnclosureMode,
    PortGeometry,
    find_preset,
)
from .engine import EnclosureResult, calculate_enclosure, calculate_from_raw
from .errors import DesignWarning, EnclosureError, ExportError, ValidationError
from .geometry import (
    Cutout,
    Panel,
    PanelSet,
    TextNote,
    generate_panels,
    panels_to_dxf,
    write_cut_sheet,
)
from .normalize import normalize_box, normalize_driver, normalize_port
from .serialization import (
    dataclass_schema,
    enclosure_json_schemas,
    enclosure_request_schema,
    enclosure_response_schema,
    enclosure_schema,
    panels_response_schema,
    panels_schema,
)
from .settings import DEFAULT_SETTINGS, EngineSettings, settings_from_env

__all__ = [
    "EnclosureMode",
    "DriverParams",
    "BoxParams",
    "PortGeometry",
    "DriverPreset",
    "DRIVER_PRESETS",
    "find_preset",
    "normalize_driver",
    "normalize_port",
    "normalize_box",
    "Alignment",
    "solve_alignment",
    "ResponseCurves",
    "generate_curves",
    "DISPLACEMENT_SAFETY_FACTOR",
    "evaluate_warnings",
    "EnclosureResult",
    "calculate_enclosure",
    "calculate_from_raw",
    "Panel",
    "Cutout",
    "TextNote",
    "PanelSet",
    "generate_panels",
    "panels_to_dxf",
    "write_cut_sheet",
    "EngineSettings",
    "DEFAULT_SETTINGS",
    "settings_from_env",
    "EnclosureError",
    "ValidationError",
    "ExportError",
    "DesignWarning",
    "dataclass_schema",
    "enclosure_request_schema",
    "enclosure_response_schema",
    "enclosure_schema",
    "panels_response_schema",
    "panels_schema",
    "enclosure_json_schemas",
]
