"""Unit conversions shared by the solver, curve generator, and cut-sheet export.

Every cross-unit factor lives here so the numerical modules only ever see
canonical quantities (metres, square metres, henries, litres for box volume,
inches for the fabrication side).
"""

from __future__ import annotations

CM2_PER_M2 = 10_000.0
MM_PER_M = 1000.0
CM_PER_M = 100.0
MH_PER_H = 1000.0
LITRES_PER_M3 = 1000.0
CUBIC_INCHES_PER_LITRE = 61.024
M_PER_INCH = 0.0254
CM_PER_INCH = 2.54


def cm2_to_m2(value: float) -> float:
    return value / CM2_PER_M2


def m2_to_cm2(value: float) -> float:
    return value * CM2_PER_M2


def mm_to_m(value: float) -> float:
    return value / MM_PER_M


def m_to_mm(value: float) -> float:
    return value * MM_PER_M


def cm_to_m(value: float) -> float:
    return value / CM_PER_M


def m_to_cm(value: float) -> float:
    return value * CM_PER_M


def mh_to_h(value: float) -> float:
    return value / MH_PER_H


def litres_to_m3(value: float) -> float:
    return value / LITRES_PER_M3


def m3_to_litres(value: float) -> float:
    return value * LITRES_PER_M3


def litres_to_cubic_inches(value: float) -> float:
    """Return ``value`` litres expressed in cubic inches."""

    return value * CUBIC_INCHES_PER_LITRE


def cubic_inches_to_litres(value: float) -> float:
    return value / CUBIC_INCHES_PER_LITRE


def inches_to_m(value: float) -> float:
    return value * M_PER_INCH


def m_to_inches(value: float) -> float:
    return value / M_PER_INCH


def cm_to_inches(value: float) -> float:
    return value / CM_PER_INCH


__all__ = [
    "CM2_PER_M2",
    "MM_PER_M",
    "CM_PER_M",
    "MH_PER_H",
    "LITRES_PER_M3",
    "CUBIC_INCHES_PER_LITRE",
    "M_PER_INCH",
    "CM_PER_INCH",
    "cm2_to_m2",
    "m2_to_cm2",
    "mm_to_m",
    "m_to_mm",
    "cm_to_m",
    "m_to_cm",
    "mh_to_h",
    "litres_to_m3",
    "m3_to_litres",
    "litres_to_cubic_inches",
    "cubic_inches_to_litres",
    "inches_to_m",
    "m_to_inches",
    "cm_to_inches",
]
