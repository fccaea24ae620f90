"""Engine entry points: normalise, solve, sample curves, and evaluate warnings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .acoustics.alignment import solve_alignment
from .acoustics.response import generate_curves
from .diagnostics import evaluate_warnings
from .drivers import BoxParams, DriverParams, EnclosureMode
from .normalize import normalize_box, normalize_driver
from .settings import DEFAULT_SETTINGS, EngineSettings

logger = logging.getLogger(__name__)

CurvePoints = tuple[tuple[float, float], ...]


@dataclass(slots=True, frozen=True)
class EnclosureResult:
    """Solved box parameters, response curves, and advisories for one request."""

    mode: EnclosureMode
    volume_l: float
    tuning_hz: float | None
    """Vent tuning; ``None`` for sealed boxes, which report ``system_resonance_hz``."""

    system_resonance_hz: float | None
    qtc: float | None
    port_length_cm: float | None
    port_area_m2: float
    sd_m2: float
    """Cone area of the driver the curves were computed for; sizes the baffle cutout."""

    f3_hz: float | None
    spl_curve: CurvePoints
    velocity_curve: CurvePoints
    excursion_curve: CurvePoints
    warnings: tuple[str, ...]
    warning_codes: tuple[str, ...] = ()

    def frequencies(self) -> list[float]:
        return [freq for freq, _ in self.spl_curve]

    def max_port_velocity_ms(self) -> float:
        return max((vel for _, vel in self.velocity_curve), default=0.0)

    def max_excursion_m(self) -> float:
        return max((disp for _, disp in self.excursion_curve), default=0.0)

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "volume_l": self.volume_l,
            "tuning_hz": self.tuning_hz,
            "system_resonance_hz": self.system_resonance_hz,
            "qtc": self.qtc,
            "port_length_cm": self.port_length_cm,
            "port_area_m2": self.port_area_m2,
            "sd_m2": self.sd_m2,
            "f3_hz": self.f3_hz,
            "frequency_hz": self.frequencies(),
            "spl_db": [level for _, level in self.spl_curve],
            "port_velocity_ms": [vel for _, vel in self.velocity_curve],
            "cone_excursion_m": [disp for _, disp in self.excursion_curve],
            "max_port_velocity_ms": self.max_port_velocity_ms(),
            "max_excursion_m": self.max_excursion_m(),
            "warnings": list(self.warnings),
            "warning_codes": list(self.warning_codes),
        }


def calculate_enclosure(
    mode: EnclosureMode | str,
    driver: DriverParams,
    box: BoxParams,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> EnclosureResult:
    """Solve ``box`` for ``driver`` and return curves plus warnings.

    ``mode`` takes precedence over ``box.mode``. Raises
    :class:`~enclosure_core.errors.ValidationError` when the alignment is
    degenerate; warnings never abort the calculation.
    """

    resolved_mode = EnclosureMode.parse(mode)
    if box.mode is not resolved_mode:
        box = replace(box, mode=resolved_mode)

    alignment = solve_alignment(driver, box)
    logger.debug(
        "Solved %s alignment: Vb=%.2f L Fb=%s Lv=%s",
        resolved_mode.value,
        alignment.volume_l,
        alignment.tuning_hz,
        alignment.port_length_cm,
    )

    curves = generate_curves(driver, box, alignment, settings)
    warnings = evaluate_warnings(driver, box, alignment, curves, settings)

    return EnclosureResult(
        mode=resolved_mode,
        volume_l=alignment.volume_l,
        tuning_hz=alignment.tuning_hz,
        system_resonance_hz=alignment.system_resonance_hz,
        qtc=alignment.qtc,
        port_length_cm=alignment.port_length_cm,
        port_area_m2=alignment.port_area_m2,
        sd_m2=driver.sd_m2,
        f3_hz=curves.f3_hz(),
        spl_curve=curves.spl_curve(),
        velocity_curve=curves.velocity_curve(),
        excursion_curve=curves.excursion_curve(),
        warnings=tuple(str(warning) for warning in warnings),
        warning_codes=tuple(warning.code for warning in warnings),
    )


def calculate_from_raw(
    mode: EnclosureMode | str,
    raw_driver: Mapping[str, object],
    raw_box: Mapping[str, object],
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> tuple[DriverParams, BoxParams, EnclosureResult]:
    """Normalise form input, then run :func:`calculate_enclosure`."""

    driver = normalize_driver(raw_driver)
    box = normalize_box(mode, raw_box)
    return driver, box, calculate_enclosure(box.mode, driver, box, settings)


__all__ = ["EnclosureResult", "calculate_enclosure", "calculate_from_raw"]
