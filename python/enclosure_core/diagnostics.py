"""Advisory checks applied to a solved alignment and its response curves."""

from __future__ import annotations

from .acoustics.alignment import Alignment
from .acoustics.response import ResponseCurves
from .drivers import BoxParams, DriverParams, EnclosureMode
from .errors import DesignWarning
from .settings import DEFAULT_SETTINGS, EngineSettings
from .units import m_to_mm


def _port_velocity_warning(curves: ResponseCurves, limit_ms: float) -> DesignWarning | None:
    offending = [
        (freq, vel)
        for freq, vel in zip(curves.frequency_hz, curves.port_velocity_ms, strict=True)
        if vel > limit_ms
    ]
    if not offending:
        return None
    peak_freq, peak_vel = max(offending, key=lambda item: item[1])
    return DesignWarning(
        "port-velocity",
        f"High port velocity at {peak_freq:.0f} Hz: {peak_vel:.2f} m/s exceeds {limit_ms:g} m/s "
        f"at {len(offending)} frequencies. Consider a larger port area or lower power.",
    )


def _excursion_warning(driver: DriverParams, curves: ResponseCurves) -> DesignWarning | None:
    xmax = driver.xmax_m
    if xmax <= 0:
        return None
    offending = [
        (freq, disp)
        for freq, disp in zip(curves.frequency_hz, curves.cone_excursion_m, strict=True)
        if disp > xmax
    ]
    if not offending:
        return None
    peak_freq, peak_disp = max(offending, key=lambda item: item[1])
    return DesignWarning(
        "excursion",
        f"Excursion exceeds Xmax ({m_to_mm(xmax):.1f} mm) at {len(offending)} frequencies; "
        f"peak {m_to_mm(peak_disp):.1f} mm at {peak_freq:.0f} Hz.",
    )


def evaluate_warnings(
    driver: DriverParams,
    box: BoxParams,
    alignment: Alignment,
    curves: ResponseCurves,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> list[DesignWarning]:
    """Return advisories in rule order; the list is empty for a clean design."""

    warnings: list[DesignWarning] = list(alignment.advisories)

    velocity = _port_velocity_warning(curves, settings.port_velocity_limit_ms)
    if velocity is not None:
        warnings.append(velocity)

    if box.wall_thickness_in < settings.min_wall_thickness_in:
        warnings.append(
            DesignWarning(
                "wall-thickness",
                f"Wall thickness under {settings.min_wall_thickness_in:g} in may reduce rigidity.",
            )
        )

    if (
        alignment.mode is EnclosureMode.PORTED
        and alignment.port_length_cm is not None
        and alignment.port_length_cm > settings.port_length_ratio_limit * alignment.volume_l
    ):
        warnings.append(
            DesignWarning(
                "port-length",
                "Port length is very long relative to box size. "
                "Consider multiple ports or a different design.",
            )
        )

    excursion = _excursion_warning(driver, curves)
    if excursion is not None:
        warnings.append(excursion)

    return warnings


__all__ = ["evaluate_warnings"]
