from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .constants import normalize

# Priority order matters: the first definition whose orb fits wins.
ASPECTS = [
    ("conjunction", 0.0, 8.0),
    ("sextile", 60.0, 6.0),
    ("square", 90.0, 7.0),
    ("trine", 120.0, 8.0),
    ("opposition", 180.0, 8.0),
]

MAJOR = {name: angle for name, angle, _orb in ASPECTS}
DEFAULT_ORB = {name: orb for name, _angle, orb in ASPECTS}


@dataclass(frozen=True)
class Aspect:
    body: str
    other: str
    type: str
    orb: float

    @property
    def angle(self) -> float:
        return MAJOR[self.type]

    def reversed(self) -> "Aspect":
        return Aspect(body=self.other, other=self.body, type=self.type, orb=self.orb)


def aspect_angle(name: str) -> float | None:
    return MAJOR.get(name.lower())


def separation(a: float, b: float) -> float:
    """Return the minimal angular distance between two longitudes, in [0, 180]."""

    d = abs(normalize(a - b))
    return min(d, 360.0 - d)


def classify_separation(sep: float, orbs: Dict[str, float] | None = None) -> Optional[tuple[str, float]]:
    orbs = orbs or DEFAULT_ORB
    for name, exact, default_orb in ASPECTS:
        orb = abs(sep - exact)
        if orb <= orbs.get(name, default_orb):
            return name, orb
    return None


def find_aspects(positions: Iterable, orbs: Dict[str, float] | None = None) -> List[Aspect]:
    """One aspect at most per unordered pair of distinct bodies.

    ``positions`` holds objects with ``name`` and ``lon`` (sidereal).
    """

    bodies = list(positions)
    res: List[Aspect] = []
    for i in range(len(bodies)):
        for j in range(i + 1, len(bodies)):
            p1, p2 = bodies[i], bodies[j]
            if p1.name == p2.name:
                continue
            match = classify_separation(separation(p1.lon, p2.lon), orbs)
            if match is None:
                continue
            kind, orb = match
            res.append(Aspect(body=p1.name, other=p2.name, type=kind, orb=orb))
    return res


def aspects_by_body(aspects: Iterable[Aspect]) -> Dict[str, List[Aspect]]:
    """Index aspects by body in both directions."""

    index: Dict[str, List[Aspect]] = {}
    for asp in aspects:
        index.setdefault(asp.body, []).append(asp)
        index.setdefault(asp.other, []).append(asp.reversed())
    return index
