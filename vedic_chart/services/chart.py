"""Chart orchestration: one pipeline, several read-only views.

``compute_chart`` runs every stage. The narrower views stop as early as the
requested data allows; ``dasha_schedule`` and ``nakshatra_of`` never touch the
house resolver.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .aspects import Aspect, aspects_by_body, find_aspects
from .dashas_vimshottari import DashaSchedule, compute_vimshottari, compute_vimshottari_for_positions
from .ephem import EphemerisProvider, SwissEphemerisProvider
from .errors import DashaCalculationError, InvalidLocationInput, PositionCalculationError
from .houses import Ascendant, house_table, resolve_ascendant, whole_sign_cusps
from .positions import (
    NODE_BODIES,
    BodyPosition,
    canonical_body,
    compute_positions,
    node_type,
    sidereal_body,
)
from .sidereal import ayanamsa as compute_ayanamsa
from .sidereal import resolve_model
from .timeconv import to_jd_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BirthRecord:
    """
    Immutable birth input used for chart calculation.
    """
    date: str  # YYYY-MM-DD
    time: str  # HH:MM[:SS]
    tz: str    # IANA name or fixed offset
    lat: float
    lon: float

    def validate(self) -> None:
        if not (math.isfinite(self.lat) and -90.0 <= self.lat <= 90.0):
            raise InvalidLocationInput(f"Latitude {self.lat!r} outside [-90, 90]")
        if not (math.isfinite(self.lon) and -180.0 <= self.lon <= 180.0):
            raise InvalidLocationInput(f"Longitude {self.lon!r} outside [-180, 180]")


@dataclass(frozen=True)
class ChartResult:
    jd_utc: float
    ayanamsha: str
    ayanamsa: float
    ascendant: Ascendant
    cusps: List[float]
    positions: List[BodyPosition]
    aspects: List[Aspect]
    dasha: DashaSchedule
    node_type: str = "true"
    aspects_index: Dict[str, List[Aspect]] = field(default_factory=dict)

    @property
    def houses(self) -> List[dict]:
        return house_table(self.ascendant.sign)


@dataclass(frozen=True)
class _Frame:
    jd_utc: float
    ayanamsa: float


class ChartEngine:
    """
    Orchestrates chart calculation.

    Every call is independent: the ayanamsha model and node flavour are
    fixed per engine and handed to each provider call explicitly.
    """

    def __init__(
        self,
        provider: Optional[EphemerisProvider] = None,
        ayanamsha: Optional[str] = None,
        node: Optional[str] = None,
    ) -> None:
        self.provider = provider if provider is not None else SwissEphemerisProvider()
        self.ayanamsha = resolve_model(ayanamsha)
        node = (node or "").strip().lower()
        self.node = node if node in NODE_BODIES else node_type()

    # ─────────────────────────────────────────────
    # Shared stages
    # ─────────────────────────────────────────────

    def _frame(self, record: BirthRecord) -> _Frame:
        record.validate()
        jd = to_jd_utc(record.date, record.time, record.tz)
        return _Frame(jd_utc=jd, ayanamsa=compute_ayanamsa(self.provider, jd, self.ayanamsha))

    def _ascendant(self, record: BirthRecord, frame: _Frame) -> Ascendant:
        return resolve_ascendant(self.provider, frame.jd_utc, record.lat, record.lon, frame.ayanamsa)

    def _positions(self, frame: _Frame, asc: Ascendant) -> List[BodyPosition]:
        return compute_positions(self.provider, frame.jd_utc, frame.ayanamsa, asc.sign, node=self.node)

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def compute_chart(self, record: BirthRecord) -> ChartResult:
        frame = self._frame(record)
        asc = self._ascendant(record, frame)
        positions = self._positions(frame, asc)
        aspects = find_aspects(positions)
        dasha = compute_vimshottari_for_positions(frame.jd_utc, positions)

        logger.info(
            "chart_computed",
            extra={"jd": frame.jd_utc, "bodies": len(positions), "aspect_count": len(aspects)},
        )
        return ChartResult(
            jd_utc=frame.jd_utc,
            ayanamsha=self.ayanamsha,
            ayanamsa=frame.ayanamsa,
            ascendant=asc,
            cusps=whole_sign_cusps(asc.sign),
            positions=positions,
            aspects=aspects,
            dasha=dasha,
            node_type=self.node,
            aspects_index=aspects_by_body(aspects),
        )

    def positions(self, record: BirthRecord) -> List[BodyPosition]:
        frame = self._frame(record)
        return self._positions(frame, self._ascendant(record, frame))

    def ascendant(self, record: BirthRecord) -> Ascendant:
        return self._ascendant(record, self._frame(record))

    def houses(self, record: BirthRecord) -> List[dict]:
        return house_table(self.ascendant(record).sign)

    def dasha_schedule(self, record: BirthRecord) -> DashaSchedule:
        frame = self._frame(record)
        try:
            moon = sidereal_body(self.provider, frame.jd_utc, "Moon", frame.ayanamsa, node=self.node)
        except PositionCalculationError as exc:
            raise DashaCalculationError(f"Moon position unavailable: {exc}") from exc
        return compute_vimshottari(frame.jd_utc, moon.lon)

    def nakshatra_of(self, record: BirthRecord, body: str) -> Optional[dict]:
        """Nakshatra details for one body, or None when it could not be computed."""

        name = canonical_body(body)
        frame = self._frame(record)
        try:
            pos = sidereal_body(self.provider, frame.jd_utc, name, frame.ayanamsa, node=self.node)
        except PositionCalculationError as exc:
            logger.warning("nakshatra_body_failed", extra={"body": name, "error": str(exc)})
            return None
        return {
            "planet": pos.name,
            "nakshatra": pos.nakshatra_name,
            "lord": pos.nakshatra_lord,
            "pada": pos.pada,
            "degree": pos.degree_in_nakshatra,
        }
