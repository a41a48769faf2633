"""Ascendant resolution and Whole-Sign houses.

Under Whole-Sign the sign holding the ascendant is house 1 in its entirety,
so every cusp is a multiple of 30° and house membership depends only on
sign distance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import SIGN_NAMES, SIGN_SPAN, degree_in_sign, fmt_deg, normalize, sign_index_from_lon
from .errors import HouseCalculationError
from .sidereal import to_sidereal
from .vedic import nakshatra_from_lon_sidereal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ascendant:
    tropical_lon: float
    lon: float  # sidereal
    sign: int

    @property
    def sign_name(self) -> str:
        return SIGN_NAMES[self.sign]

    @property
    def degree(self) -> float:
        return degree_in_sign(self.lon)

    @property
    def nakshatra(self) -> dict:
        return nakshatra_from_lon_sidereal(self.lon)

    @property
    def formatted(self) -> str:
        return fmt_deg(self.lon)


def resolve_ascendant(provider, jd_utc: float, lat: float, lon: float, ayanamsa_deg: float) -> Ascendant:
    try:
        tropical = provider.ascendant(jd_utc, lat, lon)
    except HouseCalculationError:
        logger.error("ascendant_failed", extra={"jd": jd_utc, "lat": lat, "lon": lon})
        raise

    if tropical is None:
        raise HouseCalculationError(f"Provider returned no ascendant for lat={lat}, lon={lon}")
    try:
        sidereal = to_sidereal(tropical, ayanamsa_deg)
    except ValueError as exc:
        raise HouseCalculationError(f"Unusable ascendant {tropical!r}") from exc

    return Ascendant(tropical_lon=normalize(tropical), lon=sidereal, sign=sign_index_from_lon(sidereal))


def whole_sign_cusps(asc_sign: int) -> list[float]:
    return [((asc_sign + i) % 12) * SIGN_SPAN for i in range(12)]


def house_of(sign: int, asc_sign: int) -> int:
    return ((sign - asc_sign + 12) % 12) + 1


def house_table(asc_sign: int) -> list[dict]:
    return [
        {"house": i + 1, "sign": SIGN_NAMES[int(cusp // SIGN_SPAN)], "cusp": cusp}
        for i, cusp in enumerate(whole_sign_cusps(asc_sign))
    ]
