"""CLI that solves an enclosure and writes its panel cut sheet as DXF.

With ``--schemas DIR`` it also writes one JSON Schema document per engine
contract, holding the request and response documents the gateway serves
under /schemas. Given ``--schemas`` and no driver input, only the schemas
are written.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve()
PYTHON_ROOT = SCRIPT_PATH.parent.parent
PROJECT_ROOT = PYTHON_ROOT.parent

for candidate in (PROJECT_ROOT, PYTHON_ROOT):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from enclosure_core import (  # noqa: E402 - path adjusted above
    DRIVER_PRESETS,
    EnclosureError,
    EnclosureMode,
    calculate_from_raw,
    enclosure_json_schemas,
    find_preset,
    generate_panels,
    settings_from_env,
    write_cut_sheet,
)

logger = logging.getLogger("export_cut_sheet")

# CLI option -> raw form field, in the units the input forms use.
DRIVER_OPTIONS = {
    "fs": "Fs",
    "qts": "Qts",
    "vas": "Vas",
    "sd": "Sd",
    "xmax": "Xmax",
    "re": "Re",
    "le": "Le",
    "sensitivity": "sensitivity",
}
BOX_OPTIONS = {
    "volume": "volume",
    "tuning": "tuning",
    "port_diameter": "portDiameter",
    "slot_width": "slotWidth",
    "slot_height": "slotHeight",
    "num_ports": "numPorts",
    "port_length": "portLength",
    "wall_thickness": "wallThickness",
    "width": "width",
    "height": "height",
    "depth": "depth",
    "ratio": "ratio",
}


def _raw_inputs(args: argparse.Namespace) -> tuple[dict[str, object], dict[str, object]]:
    raw_driver: dict[str, object] = {}
    if args.preset:
        preset = find_preset(args.preset)
        raw_driver.update(preset.raw)
        raw_driver["name"] = preset.name
    for option, field in DRIVER_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            raw_driver[field] = value

    raw_box: dict[str, object] = {}
    for option, field in BOX_OPTIONS.items():
        value = getattr(args, option)
        if value is not None:
            raw_box[field] = value
    return raw_driver, raw_box


def write_contract_schemas(directory: Path) -> list[Path]:
    """Write ``<contract>.schema.json`` for each engine contract into *directory*."""

    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for contract, sides in sorted(enclosure_json_schemas().items()):
        target = directory / f"{contract}.schema.json"
        target.write_text(json.dumps(sides, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        written.append(target)
    return written


def _has_driver_input(args: argparse.Namespace) -> bool:
    return bool(args.preset) or any(getattr(args, option) is not None for option in DRIVER_OPTIONS)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve an enclosure and export a DXF cut sheet.")
    parser.add_argument(
        "--preset",
        choices=[preset.name for preset in DRIVER_PRESETS],
        help="Start from a built-in driver preset; explicit driver options override it.",
    )
    parser.add_argument(
        "--mode",
        default=EnclosureMode.SEALED.value,
        help="Enclosure mode: sealed, ported, bandpass4 or bandpass6.",
    )

    driver = parser.add_argument_group("driver (Fs Hz, Vas L, Sd cm^2, Xmax mm, Le mH)")
    driver.add_argument("--fs", type=float)
    driver.add_argument("--qts", type=float)
    driver.add_argument("--vas", type=float)
    driver.add_argument("--sd", type=float)
    driver.add_argument("--xmax", type=float)
    driver.add_argument("--re", type=float)
    driver.add_argument("--le", type=float)
    driver.add_argument("--sensitivity", type=float, help="dB SPL @ 1 W / 1 m")

    box = parser.add_argument_group("box (volume L, tuning Hz, port cm, panels in)")
    box.add_argument("--volume", type=float)
    box.add_argument("--tuning", type=float)
    box.add_argument("--port-diameter", type=float)
    box.add_argument("--slot-width", type=float)
    box.add_argument("--slot-height", type=float)
    box.add_argument("--num-ports", type=int)
    box.add_argument("--port-length", type=float)
    box.add_argument("--wall-thickness", type=float)
    box.add_argument("--width", type=float)
    box.add_argument("--height", type=float)
    box.add_argument("--depth", type=float)
    box.add_argument("--ratio", type=float, help="Bandpass chamber ratio (Vb / Vas).")

    parser.add_argument(
        "--output",
        type=Path,
        default=Path("enclosure.dxf"),
        help="Destination DXF file.",
    )
    parser.add_argument(
        "--schemas",
        type=Path,
        metavar="DIR",
        help="Also write the enclosure and panels contract schemas into DIR.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the calculation result as JSON instead of a summary.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _summary_lines(result_dict: dict[str, object]) -> list[str]:
    lines = [f"Mode: {result_dict['mode']}", f"Volume: {result_dict['volume_l']:.2f} L"]
    if result_dict["tuning_hz"] is not None:
        lines.append(f"Tuning: {result_dict['tuning_hz']:.2f} Hz")
    if result_dict["system_resonance_hz"] is not None:
        lines.append(f"Fc: {result_dict['system_resonance_hz']:.2f} Hz (Qtc {result_dict['qtc']:.3f})")
    if result_dict["port_length_cm"] is not None:
        lines.append(f"Port length: {result_dict['port_length_cm']:.1f} cm")
    if result_dict["f3_hz"] is not None:
        lines.append(f"F3: {result_dict['f3_hz']:.1f} Hz")
    return lines


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.schemas is not None:
        try:
            schema_files = write_contract_schemas(args.schemas.expanduser())
        except OSError as exc:
            logger.error("Could not write schemas: %s", exc)
            return 2
        for schema_file in schema_files:
            logger.info("Wrote schema to %s", schema_file)
        if not _has_driver_input(args):
            return 0

    try:
        settings = settings_from_env()
        raw_driver, raw_box = _raw_inputs(args)
        _, box, result = calculate_from_raw(args.mode, raw_driver, raw_box, settings)
        panel_set = generate_panels(box, result)
        path = write_cut_sheet(args.output.expanduser(), panel_set)
    except (EnclosureError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    result_dict = result.to_dict()
    if args.json:
        print(json.dumps(result_dict, indent=2))
    else:
        for line in _summary_lines(result_dict):
            print(line)
        for warning in result.warnings:
            print(f"Warning: {warning}")
        print(f"Wrote cut sheet to {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
