"""Closed-form alignment solver for sealed, ported, and bandpass enclosures.

Any box parameter the caller leaves unset is filled in from the classic
Thiele/Small alignment equations:

* sealed: volume for a target Qtc of 0.707, ``Vb = Vas / ((Qtc/Qts)^2 - 1)``
* ported: QB3 volume ``Vb = 15 * Qts^2.87 * Vas`` and tuning
  ``Fb = 0.42 * Fs * Qts^-0.9``
* bandpass: chamber volume and tuning as fixed multiples of Vas and Fs

Values supplied by the caller are always returned unmodified.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite, sqrt

from ..drivers import BANDPASS_TUNING_MULTIPLE, BoxParams, DriverParams, EnclosureMode
from ..errors import DesignWarning, ValidationError
from ..units import m2_to_cm2

SEALED_TARGET_QTC = 0.707
QB3_VOLUME_COEFFICIENT = 15.0
QB3_VOLUME_EXPONENT = 2.87
QB3_TUNING_COEFFICIENT = 0.42
QB3_TUNING_EXPONENT = -0.9
# Lv (cm) = PORT_LENGTH_CONSTANT * A(cm^2) / (Fb^2 * Vb(L)) - PORT_END_CORRECTION * sqrt(A(cm^2))
PORT_LENGTH_CONSTANT = 23562.5
PORT_END_CORRECTION = 0.823


@dataclass(slots=True, frozen=True)
class Alignment:
    """Solved box parameters for one driver/enclosure pairing."""

    mode: EnclosureMode
    volume_l: float
    tuning_hz: float | None
    system_resonance_hz: float | None
    qtc: float | None
    port_area_m2: float
    port_length_cm: float | None
    advisories: tuple[DesignWarning, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode.value,
            "volume_l": self.volume_l,
            "tuning_hz": self.tuning_hz,
            "system_resonance_hz": self.system_resonance_hz,
            "qtc": self.qtc,
            "port_area_m2": self.port_area_m2,
            "port_length_cm": self.port_length_cm,
        }


def sealed_volume(vas_l: float, qts: float, qtc: float = SEALED_TARGET_QTC) -> float:
    """Return the sealed volume giving total system Q ``qtc``."""

    ratio = (qtc / qts) ** 2 - 1.0
    if ratio <= 0:
        raise ValidationError(
            "Qts",
            f"a sealed alignment with Qtc={qtc} needs Qts below {qtc} (got {qts})",
        )
    return vas_l / ratio


def sealed_system_resonance(fs_hz: float, vas_l: float, vb_l: float) -> float:
    """Return Fc = Fs * sqrt(Vas/Vb + 1)."""

    return fs_hz * sqrt(vas_l / vb_l + 1.0)


def sealed_system_q(qts: float, vas_l: float, vb_l: float) -> float:
    """Return Qtc = Qts * sqrt(Vas/Vb + 1)."""

    return qts * sqrt(vas_l / vb_l + 1.0)


def qb3_volume(vas_l: float, qts: float) -> float:
    return QB3_VOLUME_COEFFICIENT * qts**QB3_VOLUME_EXPONENT * vas_l


def qb3_tuning(fs_hz: float, qts: float) -> float:
    return QB3_TUNING_COEFFICIENT * fs_hz * qts**QB3_TUNING_EXPONENT


def port_length_cm(port_area_m2: float, tuning_hz: float, volume_l: float) -> float:
    """Return the unclamped vent length (cm) for the combined area ``port_area_m2``.

    The empirical constants expect the area in cm² and the volume in litres.
    The result is negative when the vent is too large for the box and tuning.
    """

    area_cm2 = m2_to_cm2(port_area_m2)
    return PORT_LENGTH_CONSTANT * area_cm2 / (tuning_hz**2 * volume_l) - PORT_END_CORRECTION * sqrt(area_cm2)


def _require_positive(field: str, value: float) -> float:
    if not isfinite(value) or value <= 0:
        raise ValidationError(field, f"solved value {value!r} is not a positive finite number")
    return value


def validate_driver(driver: DriverParams) -> None:
    """Reject driver parameters no alignment can be solved for."""

    for field, value in (("Fs", driver.fs_hz), ("Qts", driver.qts), ("Vas", driver.vas_l)):
        if not isfinite(value) or value <= 0:
            raise ValidationError(field, f"must be a finite number greater than zero (got {value!r})")
    for field, value in (("Sd", driver.sd_m2), ("Xmax", driver.xmax_m)):
        if not isfinite(value) or value < 0:
            raise ValidationError(field, f"must be a finite, non-negative number (got {value!r})")


def solve_alignment(driver: DriverParams, box: BoxParams) -> Alignment:
    """Fill in the unspecified parameters of ``box`` for ``driver``."""

    validate_driver(driver)
    mode = box.mode
    advisories: list[DesignWarning] = []
    tuning: float | None = None
    fc: float | None = None
    qtc: float | None = None

    if mode is EnclosureMode.SEALED:
        volume = box.volume_l if box.volume_l is not None else sealed_volume(driver.vas_l, driver.qts)
    elif mode is EnclosureMode.PORTED:
        volume = box.volume_l if box.volume_l is not None else qb3_volume(driver.vas_l, driver.qts)
        tuning = box.tuning_hz if box.tuning_hz is not None else qb3_tuning(driver.fs_hz, driver.qts)
    elif mode is EnclosureMode.BANDPASS4 or mode is EnclosureMode.BANDPASS6:
        ratio = box.resolved_chamber_ratio()
        assert ratio is not None
        volume = box.volume_l if box.volume_l is not None else ratio * driver.vas_l
        tuning = (
            box.tuning_hz
            if box.tuning_hz is not None
            else BANDPASS_TUNING_MULTIPLE[mode] * driver.fs_hz
        )
    else:  # pragma: no cover - closed enum
        raise ValidationError("mode", f"unsupported enclosure mode {mode!r}")

    volume = _require_positive("Vb", volume)
    if mode is EnclosureMode.SEALED:
        fc = sealed_system_resonance(driver.fs_hz, driver.vas_l, volume)
        qtc = sealed_system_q(driver.qts, driver.vas_l, volume)

    port_area = box.port_area_m2() if mode.is_vented else 0.0
    length: float | None = None
    if mode.is_vented:
        assert tuning is not None
        tuning = _require_positive("Fb", tuning)
        if box.port_length_cm is not None:
            length = box.port_length_cm
        elif port_area > 0:
            length = port_length_cm(port_area, tuning, volume)
            if length < 0:
                advisories.append(
                    DesignWarning(
                        "negative-port-length",
                        "Calculated port length is negative. Check your parameters: "
                        "the port is too large, the box too small, or the tuning too high.",
                    )
                )
                length = 0.0

    return Alignment(
        mode=mode,
        volume_l=volume,
        tuning_hz=tuning,
        system_resonance_hz=fc,
        qtc=qtc,
        port_area_m2=port_area,
        port_length_cm=length,
        advisories=tuple(advisories),
    )


__all__ = [
    "Alignment",
    "SEALED_TARGET_QTC",
    "sealed_volume",
    "sealed_system_resonance",
    "sealed_system_q",
    "qb3_volume",
    "qb3_tuning",
    "port_length_cm",
    "solve_alignment",
    "validate_driver",
]
