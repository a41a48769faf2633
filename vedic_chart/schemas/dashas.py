from pydantic import BaseModel
from typing import Optional, List

class DurationOut(BaseModel):
    years: int
    months: int
    days: int

class DashaPeriod(BaseModel):
    lord: str
    start: str  # ISO date
    end: str    # ISO date
    start_jd: float
    end_jd: float
    years: float

class CurrentDashaOut(DashaPeriod):
    elapsed: DurationOut
    remaining: DurationOut

class DashaComputeResponse(BaseModel):
    system: str = "vimshottari"
    moon_lon: float
    nakshatra: str
    nakshatra_lord: str
    progress: float
    current: CurrentDashaOut
    sequence: List[DashaPeriod]
    as_of: Optional[str] = None
    running: Optional[DashaPeriod] = None
