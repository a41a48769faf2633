"""Swiss Ephemeris adapter implementing the ephemeris provider contract.

The engine only ever asks for tropical values; the sidereal correction is
applied on top, so the provider never runs with ``FLG_SIDEREAL``.
"""

from __future__ import annotations

import logging
import math
import os
import threading
from dataclasses import dataclass
from typing import Dict, Protocol

import swisseph as swe

from .errors import HouseCalculationError, PositionCalculationError

logger = logging.getLogger(__name__)


# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"  # Fallback if version not available

BODIES: Dict[str, int] = {
    "Sun": swe.SUN,
    "Moon": swe.MOON,
    "Mercury": swe.MERCURY,
    "Venus": swe.VENUS,
    "Mars": swe.MARS,
    "Jupiter": swe.JUPITER,
    "Saturn": swe.SATURN,
    "TrueNode": swe.TRUE_NODE,
    "MeanNode": swe.MEAN_NODE,
}

AYANAMSHA_MAP = {
    "lahiri": swe.SIDM_LAHIRI,
    "krishnamurti": swe.SIDM_KRISHNAMURTI,
    "raman": swe.SIDM_RAMAN,
}

WHOLE_SIGN = b"W"

# set_sid_mode is process-wide state inside the C library
_SID_MODE_LOCK = threading.Lock()


@dataclass(frozen=True)
class RawPosition:
    """Tropical ecliptic coordinates as returned by a provider."""

    lon: float
    lat: float
    speed: float


class EphemerisProvider(Protocol):
    def position(self, jd_utc: float, body: str) -> RawPosition: ...

    def ascendant(self, jd_utc: float, lat: float, lon: float) -> float: ...

    def ayanamsa(self, jd_utc: float, model: str) -> float: ...


def backend_name() -> str:
    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "swieph"
    return "moseph" if backend == "moseph" else "swieph"


def _backend_flag(backend: str | None = None) -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    return swe.FLG_MOSEPH if (backend or backend_name()) == "moseph" else swe.FLG_SWIEPH


def ephemeris_dir() -> str | None:
    return os.getenv("EPHEMERIS_DIR") or None


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> bool:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return False

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)
        logger.info("ephemeris_path_set", extra={"ephemeris_dir": path})
        return True
    logger.warning("ephemeris_path_missing", extra={"ephemeris_dir": path})
    return False


class SwissEphemerisProvider:
    """Provider backed by ``pyswisseph``.

    Stateless apart from the backend choice, so one instance can serve
    concurrent requests.
    """

    def __init__(self, backend: str | None = None) -> None:
        self.backend = backend or backend_name()
        self._flags = _backend_flag(self.backend) | swe.FLG_SPEED

    def position(self, jd_utc: float, body: str) -> RawPosition:
        code = BODIES.get(body)
        if code is None:
            raise PositionCalculationError(f"No ephemeris body named {body!r}", body=body)
        try:
            values, _ = swe.calc_ut(jd_utc, code, self._flags)
        except swe.Error as exc:
            raise PositionCalculationError(f"{body}: {exc}", body=body) from exc

        lon, lat, _dist, lon_speed, _lat_speed, _dist_speed = values
        if not all(math.isfinite(v) for v in (lon, lat, lon_speed)):
            raise PositionCalculationError(f"{body}: non-finite ephemeris result", body=body)
        return RawPosition(lon=lon % 360.0, lat=lat, speed=lon_speed)

    def ascendant(self, jd_utc: float, lat: float, lon: float) -> float:
        try:
            _cusps, ascmc = swe.houses(jd_utc, lat, lon, WHOLE_SIGN)
        except swe.Error as exc:
            raise HouseCalculationError(f"Ascendant unavailable at lat={lat}: {exc}") from exc
        if not ascmc or not math.isfinite(ascmc[0]):
            raise HouseCalculationError(f"Ascendant unavailable at lat={lat}")
        return ascmc[0] % 360.0

    def ayanamsa(self, jd_utc: float, model: str) -> float:
        mode = AYANAMSHA_MAP[model]
        with _SID_MODE_LOCK:
            swe.set_sid_mode(mode, 0, 0)
            return swe.get_ayanamsa_ut(jd_utc)


__all__ = [
    "AYANAMSHA_MAP",
    "BODIES",
    "ENGINE_VERSION",
    "EphemerisProvider",
    "RawPosition",
    "SwissEphemerisProvider",
    "backend_name",
    "ephemeris_dir",
    "init_paths",
]
