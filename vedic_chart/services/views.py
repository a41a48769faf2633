"""Plain-dict views of chart results shared by the HTTP routes and the CLI."""

from __future__ import annotations

from hashlib import sha256
from typing import Any, Dict, Iterable, List, Optional

from . import ephem
from .aspects import Aspect
from .chart import BirthRecord, ChartResult
from .dashas_vimshottari import DashaPeriod, DashaSchedule, period_at
from .houses import Ascendant
from .positions import BodyPosition
from .timeconv import to_jd_utc


def nakshatra_view(nakshatra: dict) -> Dict[str, Any]:
    return {"name": nakshatra["name"], "lord": nakshatra["lord"], "pada": nakshatra["pada"]}


def body_view(p: BodyPosition, aspects: Iterable[Aspect] = ()) -> Dict[str, Any]:
    return {
        "name": p.name,
        "lon": round(p.lon, 4),
        "lat": round(p.lat, 4),
        "speed": round(p.speed, 6),
        "sign": p.sign_name,
        "degree": round(p.degree, 4),
        "formatted": p.formatted,
        "house": p.house,
        "retro": p.retrograde,
        "nakshatra": {"name": p.nakshatra_name, "lord": p.nakshatra_lord, "pada": p.pada},
        "aspects": [{"planet": a.other, "type": a.type, "orb": round(a.orb, 2)} for a in aspects],
    }


def ascendant_view(asc: Ascendant) -> Dict[str, Any]:
    return {
        "lon": round(asc.lon, 4),
        "tropical_lon": round(asc.tropical_lon, 4),
        "sign": asc.sign_name,
        "degree": round(asc.degree, 4),
        "formatted": asc.formatted,
        "nakshatra": nakshatra_view(asc.nakshatra),
    }


def period_view(p: DashaPeriod) -> Dict[str, Any]:
    return {
        "lord": p.lord,
        "start": p.start,
        "end": p.end,
        "start_jd": round(p.start_jd, 6),
        "end_jd": round(p.end_jd, 6),
        "years": round(p.years, 4),
    }


def dasha_view(schedule: DashaSchedule, as_of: Optional[str] = None) -> Dict[str, Any]:
    current = period_view(schedule.current)
    current["elapsed"] = schedule.elapsed.as_dict()
    current["remaining"] = schedule.remaining.as_dict()
    out: Dict[str, Any] = {
        "system": "vimshottari",
        "moon_lon": round(schedule.moon_lon, 4),
        "nakshatra": schedule.nakshatra_name,
        "nakshatra_lord": schedule.balance.lord,
        "progress": round(schedule.balance.progress, 6),
        "current": current,
        "sequence": [period_view(p) for p in schedule.sequence],
    }
    if as_of:
        running = period_at(schedule, to_jd_utc(as_of, "00:00", "UTC"))
        out["as_of"] = as_of
        out["running"] = period_view(running) if running else None
    return out


def chart_id(record: BirthRecord, ayanamsha: str, node: str) -> str:
    seed = f"{record.date}|{record.time}|{record.lat:.6f}|{record.lon:.6f}|{record.tz}|whole_sign|{ayanamsha}|{node}"
    return "cht_" + sha256(seed.encode()).hexdigest()[:24]


def meta_view(result: ChartResult, backend: Optional[str] = None) -> Dict[str, Any]:
    return {
        "engine": "vedic-chart",
        "engine_version": ephem.ENGINE_VERSION,
        "zodiac": "sidereal",
        "house_system": "whole_sign",
        "ayanamsha": result.ayanamsha,
        "ayanamsa_deg": round(result.ayanamsa, 6),
        "node_type": result.node_type,
        "backend": backend,
        "jd_utc": round(result.jd_utc, 6),
    }


def chart_view(record: BirthRecord, result: ChartResult, as_of: Optional[str] = None,
               backend: Optional[str] = None) -> Dict[str, Any]:
    bodies: List[Dict[str, Any]] = [
        body_view(p, result.aspects_index.get(p.name, ())) for p in result.positions
    ]
    return {
        "chart_id": chart_id(record, result.ayanamsha, result.node_type),
        "meta": meta_view(result, backend),
        "ascendant": ascendant_view(result.ascendant),
        "houses": result.houses,
        "bodies": bodies,
        "aspects": [
            {"p1": a.body, "p2": a.other, "type": a.type, "orb": round(a.orb, 2)}
            for a in sorted(result.aspects, key=lambda a: a.orb)
        ],
        "dasha": dasha_view(result.dasha, as_of),
    }
