"""Frequency-response curves for solved enclosure alignments.

Each mode supplies three normalised complex transfer functions evaluated at
``s = j*omega``:

* ``total``: radiated volume acceleration relative to the passband (drives SPL)
* ``cone``: cone acceleration relative to the passband (drives excursion)
* ``port``: vent volume acceleration relative to the passband (drives air speed)

Physical displacement follows from the passband cone acceleration ``a0`` that
the driver's sensitivity implies for half-space radiation at 1 m:
``x(f) = a0 * |H(f)| / omega^2``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from math import log10, pi, sqrt

from ..drivers import AIR_DENSITY, BoxParams, DriverParams, EnclosureMode
from ..settings import DEFAULT_SETTINGS, EngineSettings
from ._utils import frequency_sweep, lower_cutoff
from .alignment import Alignment, sealed_system_q, sealed_system_resonance

P_REF = 20e-6  # 20 µPa reference pressure for SPL
REFERENCE_DISTANCE_M = 1.0
# Curves never report more than this multiple of Xmax; beyond it the linear
# model is meaningless and the value only serves as a display guard.
DISPLACEMENT_SAFETY_FACTOR = 2.0

TransferSet = Callable[[float], tuple[complex, complex, complex]]


@dataclass(slots=True, frozen=True)
class ResponseCurves:
    """SPL, port air velocity, and cone excursion sampled on a shared axis."""

    frequency_hz: tuple[float, ...]
    spl_db: tuple[float, ...]
    port_velocity_ms: tuple[float, ...]
    cone_excursion_m: tuple[float, ...]

    def spl_curve(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.frequency_hz, self.spl_db, strict=True))

    def velocity_curve(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.frequency_hz, self.port_velocity_ms, strict=True))

    def excursion_curve(self) -> tuple[tuple[float, float], ...]:
        return tuple(zip(self.frequency_hz, self.cone_excursion_m, strict=True))

    def f3_hz(self) -> float | None:
        """Lower -3 dB point of the sampled SPL curve."""

        return lower_cutoff(self.frequency_hz, self.spl_db, 3.0)

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "frequency_hz": list(self.frequency_hz),
            "spl_db": list(self.spl_db),
            "port_velocity_ms": list(self.port_velocity_ms),
            "cone_excursion_m": list(self.cone_excursion_m),
        }


def _high_pass_2(f: float, corner_hz: float, q: float) -> complex:
    y = 1j * f / corner_hz
    return y * y / (y * y + y / q + 1.0)


def _band_pass_2(f: float, centre_hz: float, q: float) -> complex:
    """Second-order band-pass section normalised to unity at ``centre_hz``."""

    y = 1j * f / centre_hz
    return (y / q) / (y * y + y / q + 1.0)


def _sealed_transfers(alignment: Alignment) -> TransferSet:
    assert alignment.system_resonance_hz is not None and alignment.qtc is not None
    fc = alignment.system_resonance_hz
    qtc = alignment.qtc

    def transfers(f: float) -> tuple[complex, complex, complex]:
        h = _high_pass_2(f, fc, qtc)
        return h, h, 0j

    return transfers


def _vented_transfers(driver: DriverParams, alignment: Alignment, leakage_q: float) -> TransferSet:
    """Small's fourth-order vented-box model with leakage losses ``QL``."""

    assert alignment.tuning_hz is not None
    alpha = driver.vas_l / alignment.volume_l
    h = alignment.tuning_hz / driver.fs_hz
    qt = driver.qts
    ql = max(leakage_q, 0.5)
    root_h = sqrt(h)

    a1 = (ql + h * qt) / (root_h * ql * qt)
    a2 = (h + (alpha + 1.0 + h * h) * ql * qt) / (h * ql * qt)
    a3 = (h * ql + qt) / (root_h * ql * qt)
    f0 = sqrt(driver.fs_hz * alignment.tuning_hz)

    def transfers(f: float) -> tuple[complex, complex, complex]:
        y = 1j * f / f0
        y2 = y * y
        denominator = y2 * y2 + a1 * y2 * y + a2 * y2 + a3 * y + 1.0
        total = y2 * y2 / denominator
        cone = y2 * (y2 + root_h * y / ql + h) / denominator
        return total, cone, total - cone

    return transfers


def _bandpass_transfers(driver: DriverParams, alignment: Alignment, order: int) -> TransferSet:
    """Symmetric band-pass of ``order`` built from cascaded sections centred on Fb.

    The cone is treated as loaded by the sealed chamber alone, and the vent
    carries the entire radiated output.
    """

    assert alignment.tuning_hz is not None
    fb = alignment.tuning_hz
    sections = order // 2
    fc = sealed_system_resonance(driver.fs_hz, driver.vas_l, alignment.volume_l)
    qtc = sealed_system_q(driver.qts, driver.vas_l, alignment.volume_l)

    def transfers(f: float) -> tuple[complex, complex, complex]:
        total = _band_pass_2(f, fb, driver.qts) ** sections
        cone = _high_pass_2(f, fc, qtc)
        return total, cone, total

    return transfers


def mode_transfers(driver: DriverParams, box: BoxParams, alignment: Alignment) -> TransferSet:
    """Return the transfer-function triple for ``alignment.mode``."""

    mode = alignment.mode
    if mode is EnclosureMode.SEALED:
        return _sealed_transfers(alignment)
    if mode is EnclosureMode.PORTED:
        return _vented_transfers(driver, alignment, box.leakage_q)
    if mode is EnclosureMode.BANDPASS4:
        return _bandpass_transfers(driver, alignment, 4)
    if mode is EnclosureMode.BANDPASS6:
        return _bandpass_transfers(driver, alignment, 6)
    raise ValueError(f"Unsupported enclosure mode: {mode!r}")  # pragma: no cover - closed enum


def passband_acceleration(driver: DriverParams, input_power_w: float) -> float:
    """Return the peak cone acceleration (m/s²) that produces the rated sensitivity."""

    if driver.sd_m2 <= 0:
        return 0.0
    pressure_rms = P_REF * 10.0 ** (driver.sensitivity_db / 20.0) * sqrt(input_power_w)
    # Half-space radiation: p = rho * Sd * a / (2 * pi * r)
    accel_rms = 2 * pi * REFERENCE_DISTANCE_M * pressure_rms / (AIR_DENSITY * driver.sd_m2)
    return accel_rms * sqrt(2.0)


def displacement_limit(driver: DriverParams) -> float | None:
    """Return the named safety bound applied to displacement curves, if Xmax is known."""

    if driver.xmax_m <= 0:
        return None
    return DISPLACEMENT_SAFETY_FACTOR * driver.xmax_m


def generate_curves(
    driver: DriverParams,
    box: BoxParams,
    alignment: Alignment,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ResponseCurves:
    """Sample SPL, port velocity, and cone excursion over the configured sweep."""

    frequencies = frequency_sweep(settings.sweep_start_hz, settings.sweep_stop_hz, int(settings.sample_count))
    transfers = mode_transfers(driver, box, alignment)

    a0 = passband_acceleration(driver, settings.input_power_w)
    limit = displacement_limit(driver)
    port_area = alignment.port_area_m2
    has_port = alignment.mode.is_vented and port_area > 0 and driver.sd_m2 > 0
    power_offset_db = 10.0 * log10(settings.input_power_w)

    spl_list: list[float] = []
    vel_list: list[float] = []
    exc_list: list[float] = []

    for f in frequencies:
        omega = 2 * pi * f
        total, cone, port = transfers(f)

        spl = driver.sensitivity_db + power_offset_db + 20.0 * log10(max(abs(total), settings.spl_floor))

        excursion = a0 * abs(cone) / omega**2
        if limit is not None:
            excursion = min(excursion, limit)

        velocity = 0.0
        if has_port:
            # Vent volume displacement expressed as an equivalent cone displacement.
            port_displacement = a0 * abs(port) / omega**2
            if limit is not None:
                port_displacement = min(port_displacement, limit)
            velocity = omega * port_displacement * driver.sd_m2 / port_area

        spl_list.append(spl)
        vel_list.append(velocity)
        exc_list.append(excursion)

    return ResponseCurves(
        frequency_hz=tuple(frequencies),
        spl_db=tuple(spl_list),
        port_velocity_ms=tuple(vel_list),
        cone_excursion_m=tuple(exc_list),
    )


__all__ = [
    "P_REF",
    "DISPLACEMENT_SAFETY_FACTOR",
    "ResponseCurves",
    "mode_transfers",
    "passband_acceleration",
    "displacement_limit",
    "generate_curves",
]
