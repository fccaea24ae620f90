"""Engine thresholds and sweep configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace

ENV_PORT_VELOCITY_LIMIT = "ENCLOSURE_PORT_VELOCITY_LIMIT_MS"
ENV_INPUT_POWER = "ENCLOSURE_INPUT_POWER_W"


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """Analysis band, drive level, and advisory thresholds."""

    sweep_start_hz: float = 10.0
    sweep_stop_hz: float = 200.0
    sample_count: int = 191
    """Evenly spaced samples across the sweep (191 gives 1 Hz steps)."""

    input_power_w: float = 1.0
    spl_floor: float = 0.001
    """Magnitude floor applied before converting to dB."""

    port_velocity_limit_ms: float = 17.0
    min_wall_thickness_in: float = 0.75
    port_length_ratio_limit: float = 0.8
    """Ported boxes warn when Lv (cm) exceeds this multiple of Vb (litres)."""

    def replace(self, **updates: float) -> EngineSettings:
        return replace(self, **updates)

    def to_dict(self) -> dict[str, float]:
        return {key: float(value) for key, value in asdict(self).items()}


DEFAULT_SETTINGS = EngineSettings()


def settings_from_env(
    environ: Mapping[str, str] | None = None,
    base: EngineSettings = DEFAULT_SETTINGS,
) -> EngineSettings:
    """Return ``base`` with thresholds overridden from environment variables."""

    env = os.environ if environ is None else environ
    updates: dict[str, float] = {}
    for key, attr in (
        (ENV_PORT_VELOCITY_LIMIT, "port_velocity_limit_ms"),
        (ENV_INPUT_POWER, "input_power_w"),
    ):
        raw = env.get(key)
        if raw is None or not raw.strip():
            continue
        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be numeric, got {raw!r}") from exc
        if value <= 0:
            raise ValueError(f"{key} must be positive")
        updates[attr] = value
    if not updates:
        return base
    return base.replace(**updates)


__all__ = [
    "EngineSettings",
    "DEFAULT_SETTINGS",
    "ENV_PORT_VELOCITY_LIMIT",
    "ENV_INPUT_POWER",
    "settings_from_env",
]
