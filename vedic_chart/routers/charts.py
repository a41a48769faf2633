from fastapi import APIRouter, HTTPException, Query
from functools import lru_cache
from typing import List, Optional

from ..schemas import (
    AscendantOut,
    BodyOut,
    ChartOptions,
    ComputeRequest,
    ComputeResponse,
    DashaComputeResponse,
    HouseOut,
    NakshatraLookupOut,
)
from ..services import views
from ..services.chart import BirthRecord, ChartEngine
from ..services.ephem import SwissEphemerisProvider
from ..services.errors import INPUT_ERRORS, ChartError, UnknownBodyError

router = APIRouter(prefix="/v1/charts", tags=["charts"])


@lru_cache(maxsize=1)
def get_provider() -> SwissEphemerisProvider:
    return SwissEphemerisProvider()


def _record(req: ComputeRequest) -> BirthRecord:
    return BirthRecord(date=req.date, time=req.time, tz=req.place.tz, lat=req.place.lat, lon=req.place.lon)


def _options(req: ComputeRequest) -> ChartOptions:
    return req.options or ChartOptions()


def _http_error(exc: ChartError) -> HTTPException:
    if isinstance(exc, UnknownBodyError):
        status = 404
    elif isinstance(exc, INPUT_ERRORS):
        status = 400
    else:
        status = 500
    return HTTPException(status_code=status, detail=exc.to_dict())


def _engine(req: ComputeRequest) -> ChartEngine:
    opts = _options(req)
    try:
        return ChartEngine(get_provider(), ayanamsha=opts.ayanamsha, node=opts.node_type)
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/compute", response_model=ComputeResponse)
@router.post("/fullchart", response_model=ComputeResponse)
def compute_chart(req: ComputeRequest):
    engine = _engine(req)
    record = _record(req)
    try:
        result = engine.compute_chart(record)
        return views.chart_view(record, result, as_of=_options(req).as_of, backend=engine.provider.backend)
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/planets", response_model=List[BodyOut])
def planets(req: ComputeRequest):
    engine = _engine(req)
    try:
        return [views.body_view(p) for p in engine.positions(_record(req))]
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/houses", response_model=List[HouseOut])
def houses(req: ComputeRequest):
    engine = _engine(req)
    try:
        return engine.houses(_record(req))
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/ascendant", response_model=AscendantOut)
def ascendant(req: ComputeRequest):
    engine = _engine(req)
    try:
        return views.ascendant_view(engine.ascendant(_record(req)))
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/dashas", response_model=DashaComputeResponse)
def dashas(req: ComputeRequest):
    engine = _engine(req)
    try:
        schedule = engine.dasha_schedule(_record(req))
        return views.dasha_view(schedule, as_of=_options(req).as_of)
    except ChartError as exc:
        raise _http_error(exc) from exc


@router.post("/nakshatra", response_model=NakshatraLookupOut)
def nakshatra(req: ComputeRequest, planet: Optional[str] = Query(None)):
    if not planet:
        raise HTTPException(status_code=400, detail="Missing planet parameter")
    engine = _engine(req)
    try:
        found = engine.nakshatra_of(_record(req), planet)
    except ChartError as exc:
        raise _http_error(exc) from exc
    if found is None:
        raise HTTPException(status_code=404, detail=f"Could not find nakshatra for planet {planet}")
    return found
