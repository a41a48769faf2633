from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict, Any

NodeType = Literal["true", "mean"]

class Place(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    tz: str  # IANA name or fixed offset such as +05:30
    query: Optional[str] = None

class ChartOptions(BaseModel):
    ayanamsha: Optional[str] = None
    node_type: Optional[NodeType] = None
    as_of: Optional[str] = None  # YYYY-MM-DD, picks the running dasha

class ChartInput(BaseModel):
    date: str  # YYYY-MM-DD
    time: str  # HH:MM or HH:MM:SS
    place: Place
    options: Optional[ChartOptions] = None

class ComputeRequest(ChartInput):
    pass

class NakshatraOut(BaseModel):
    name: str
    lord: str
    pada: int

class AspectOut(BaseModel):
    planet: str
    type: str
    orb: float

class BodyOut(BaseModel):
    name: str
    lon: float
    lat: float
    speed: float
    sign: str
    degree: float
    formatted: str
    house: Optional[int] = None
    retro: bool
    nakshatra: NakshatraOut
    aspects: List[AspectOut] = []

class AscendantOut(BaseModel):
    lon: float
    tropical_lon: float
    sign: str
    degree: float
    formatted: str
    nakshatra: NakshatraOut

class HouseOut(BaseModel):
    house: int
    sign: str
    cusp: float

class PairAspectOut(BaseModel):
    p1: str
    p2: str
    type: str
    orb: float

class MetaOut(BaseModel):
    engine: str = "vedic-chart"
    engine_version: str
    zodiac: str = "sidereal"
    house_system: str = "whole_sign"
    ayanamsha: str
    ayanamsa_deg: float
    node_type: str
    backend: Optional[str] = None
    jd_utc: float

class NakshatraLookupOut(BaseModel):
    planet: str
    nakshatra: str
    lord: str
    pada: int
    degree: float

class ComputeResponse(BaseModel):
    chart_id: str
    meta: MetaOut
    ascendant: AscendantOut
    houses: List[HouseOut]
    bodies: List[BodyOut]
    aspects: List[PairAspectOut]
    dasha: Dict[str, Any]
