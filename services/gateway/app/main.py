"""FastAPI gateway exposing the enclosure engine and cut-sheet export."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from enclosure_core import (
    DRIVER_PRESETS,
    BoxParams,
    DriverParams,
    EnclosureMode,
    EnclosureResult,
    EngineSettings,
    ExportError,
    PortGeometry,
    ValidationError,
    calculate_enclosure,
    enclosure_json_schemas,
    generate_panels,
    panels_to_dxf,
    settings_from_env,
)

logger = logging.getLogger(__name__)

DXF_MEDIA_TYPE = "application/dxf"


def schema_catalog() -> dict[str, dict[str, dict[str, Any]]]:
    """Return the JSON schema catalog for the engine contracts."""

    return enclosure_json_schemas()


class DriverPayload(BaseModel):
    fs_hz: float = Field(..., gt=0)
    qts: float = Field(..., gt=0)
    vas_l: float = Field(..., gt=0)
    sd_m2: float = Field(0.0, ge=0)
    xmax_m: float = Field(0.0, ge=0)
    re_ohm: float | None = Field(None, gt=0)
    le_h: float | None = Field(None, ge=0)
    qes: float | None = Field(None, gt=0)
    bl_t_m: float | None = Field(None, gt=0)
    sensitivity_db: float = Field(90.0)
    name: str | None = Field(None)

    def to_driver(self) -> DriverParams:
        return DriverParams(**self.model_dump())


class PortPayload(BaseModel):
    diameter_m: float | None = Field(None, gt=0)
    count: int = Field(1, ge=1)
    slot_width_m: float | None = Field(None, gt=0)
    slot_height_m: float | None = Field(None, gt=0)

    def to_port(self) -> PortGeometry:
        return PortGeometry(**self.model_dump())


class BoxPayload(BaseModel):
    volume_l: float | None = Field(None, gt=0)
    tuning_hz: float | None = Field(None, gt=0)
    port: PortPayload | None = Field(None)
    port_length_cm: float | None = Field(None, ge=0)
    wall_thickness_in: float = Field(0.75, ge=0)
    width_in: float | None = Field(None, gt=0)
    height_in: float | None = Field(None, gt=0)
    depth_in: float | None = Field(None, gt=0)
    chamber_ratio: float | None = Field(None, gt=0)
    leakage_q: float = Field(10.0, gt=0)

    def to_box(self, mode: EnclosureMode) -> BoxParams:
        params = self.model_dump(exclude={"port"})
        params["port"] = self.port.to_port() if self.port is not None else None
        return BoxParams(mode=mode, **params)


class CalculateRequest(BaseModel):
    mode: str = Field(..., min_length=1)
    driver: DriverPayload
    box: BoxPayload = Field(default_factory=BoxPayload)

    def resolve(self) -> tuple[DriverParams, BoxParams]:
        try:
            mode = EnclosureMode.parse(self.mode)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return self.driver.to_driver(), self.box.to_box(mode)


def _solve(payload: CalculateRequest, settings: EngineSettings) -> tuple[BoxParams, EnclosureResult]:
    driver, box = payload.resolve()
    try:
        result = calculate_enclosure(box.mode, driver, box, settings)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return box, result


def _preset_catalog() -> list[dict[str, Any]]:
    return [{"name": preset.name, "parameters": dict(preset.raw)} for preset in DRIVER_PRESETS]


settings = settings_from_env()
app = FastAPI(title="Enclosure Designer Gateway", version="0.1.0")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/presets")
async def list_presets() -> dict[str, Any]:
    """Return the built-in drivers in form units (Sd cm², Xmax mm, Le mH)."""

    return {"presets": _preset_catalog()}


@app.post("/enclosure/calculate")
async def calculate(payload: CalculateRequest) -> dict[str, Any]:
    _, result = _solve(payload, settings)
    return result.to_dict()


@app.post("/enclosure/panels")
async def panels(payload: CalculateRequest) -> dict[str, Any]:
    box, result = _solve(payload, settings)
    try:
        panel_set = generate_panels(box, result)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return panel_set.to_dict()


@app.post("/enclosure/cutsheet")
async def cutsheet(payload: CalculateRequest) -> Response:
    box, result = _solve(payload, settings)
    try:
        text = panels_to_dxf(generate_panels(box, result))
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except ExportError as exc:
        logger.exception("Cut sheet export failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return Response(
        content=text,
        media_type=DXF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.mode.value}-enclosure.dxf"'},
    )


@app.get("/schemas")
async def list_schemas() -> dict[str, Any]:
    """Return the JSON schema catalog for the enclosure and panel contracts."""

    return {"contracts": schema_catalog()}


@app.get("/schemas/{contract}")
async def fetch_schema(contract: str) -> dict[str, Any]:
    catalog = schema_catalog()
    key = contract.lower()
    entry = catalog.get(key)
    if entry is None:
        raise HTTPException(status_code=404, detail="Schema contract not found")
    return {"contract": key, "request": entry["request"], "response": entry["response"]}


__all__ = [
    "app",
    "DriverPayload",
    "PortPayload",
    "BoxPayload",
    "CalculateRequest",
    "schema_catalog",
]
