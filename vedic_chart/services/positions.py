"""Sidereal body positions and their sign/nakshatra/house classification."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .constants import SIGN_NAMES, degree_in_sign, fmt_deg, normalize, sign_index_from_lon
from .errors import NoPositionsCalculated, PositionCalculationError, UnknownBodyError
from .houses import house_of
from .sidereal import to_sidereal
from .vedic import NAKSHATRA_LORDS, NAKSHATRAS, degree_in_nakshatra, nakshatra_index, pada_of

logger = logging.getLogger(__name__)

TRACKED_BODIES = ["Sun", "Moon", "Mercury", "Venus", "Mars", "Jupiter", "Saturn", "Rahu", "Ketu"]

ASCENDING_NODE = "Rahu"
DESCENDING_NODE = "Ketu"

NODE_BODIES = {"true": "TrueNode", "mean": "MeanNode"}


@dataclass(frozen=True)
class BodyPosition:
    name: str
    lon: float  # sidereal, [0, 360)
    lat: float
    speed: float
    sign: int
    nakshatra: int
    pada: int
    house: Optional[int] = None

    @property
    def retrograde(self) -> bool:
        return self.speed < 0

    @property
    def sign_name(self) -> str:
        return SIGN_NAMES[self.sign]

    @property
    def degree(self) -> float:
        return degree_in_sign(self.lon)

    @property
    def nakshatra_name(self) -> str:
        return NAKSHATRAS[self.nakshatra]

    @property
    def nakshatra_lord(self) -> str:
        return NAKSHATRA_LORDS[self.nakshatra]

    @property
    def degree_in_nakshatra(self) -> float:
        return degree_in_nakshatra(self.lon)

    @property
    def formatted(self) -> str:
        return fmt_deg(self.lon)


def canonical_body(name: str) -> str:
    for body in TRACKED_BODIES:
        if body.lower() == name.strip().lower():
            return body
    raise UnknownBodyError(f"Unknown body {name!r}; expected one of {', '.join(TRACKED_BODIES)}")


def node_type() -> str:
    raw = (os.getenv("NODE_TYPE") or "true").strip().lower()
    return raw if raw in NODE_BODIES else "true"


def provider_body(name: str, node: str = "true") -> str:
    if name == ASCENDING_NODE:
        return NODE_BODIES.get(node, NODE_BODIES["true"])
    if name == DESCENDING_NODE:
        raise ValueError("Ketu has no ephemeris entry; derive it with descending_node()")
    return name


def classify(name: str, lon: float, lat: float, speed: float, asc_sign: Optional[int] = None) -> BodyPosition:
    lon = normalize(lon)
    sign = sign_index_from_lon(lon)
    return BodyPosition(
        name=name,
        lon=lon,
        lat=lat,
        speed=speed,
        sign=sign,
        nakshatra=nakshatra_index(lon),
        pada=pada_of(lon),
        house=house_of(sign, asc_sign) if asc_sign is not None else None,
    )


def descending_node(rahu: BodyPosition, asc_sign: Optional[int] = None) -> BodyPosition:
    """Ketu as the exact antipode of Rahu."""

    return classify(DESCENDING_NODE, normalize(rahu.lon + 180.0), -rahu.lat, -rahu.speed, asc_sign)


def sidereal_body(provider, jd_utc: float, name: str, ayanamsa_deg: float,
                  asc_sign: Optional[int] = None, node: str = "true") -> BodyPosition:
    """Compute one body; Ketu is derived from Rahu. Raises PositionCalculationError."""

    if name == DESCENDING_NODE:
        rahu = sidereal_body(provider, jd_utc, ASCENDING_NODE, ayanamsa_deg, asc_sign, node)
        return descending_node(rahu, asc_sign)

    raw = provider.position(jd_utc, provider_body(name, node))
    try:
        lon = to_sidereal(raw.lon, ayanamsa_deg)
    except ValueError as exc:
        raise PositionCalculationError(f"{name}: {exc}", body=name) from exc
    return classify(name, lon, raw.lat, raw.speed, asc_sign)


def compute_positions(provider, jd_utc: float, ayanamsa_deg: float, asc_sign: Optional[int],
                      bodies: Iterable[str] = TRACKED_BODIES, node: str = "true") -> List[BodyPosition]:
    """Classify every tracked body, skipping the ones the provider cannot resolve.

    Raises NoPositionsCalculated when nothing at all could be computed.
    """

    results: Dict[str, BodyPosition] = {}
    failed: List[str] = []
    for name in bodies:
        if name == DESCENDING_NODE:
            rahu = results.get(ASCENDING_NODE)
            if rahu is None:
                logger.warning("position_body_skipped", extra={"body": name, "reason": "ascending node unavailable"})
                failed.append(name)
                continue
            results[name] = descending_node(rahu, asc_sign)
            continue

        try:
            results[name] = sidereal_body(provider, jd_utc, name, ayanamsa_deg, asc_sign, node)
        except PositionCalculationError as exc:
            logger.warning("position_body_failed", extra={"body": name, "error": str(exc)})
            failed.append(name)

    if not results:
        raise NoPositionsCalculated(f"No body positions could be calculated (failed: {', '.join(failed)})")
    return list(results.values())


def find_body(positions: Iterable[BodyPosition], name: str) -> Optional[BodyPosition]:
    return next((p for p in positions if p.name == name), None)
