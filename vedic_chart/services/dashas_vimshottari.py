from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .constants import normalize
from .errors import DashaCalculationError
from .positions import find_body
from .timeconv import jd_to_iso_date
from .vedic import LORD_CYCLE, NAKSHATRA_LORDS, NAKSHATRAS, arc_units, nakshatra_index

# Vimshottari order and full years per Maha
DASHA_ORDER = LORD_CYCLE
YEARS =      [   7,     20,    6,    10,     7,     18,       16,      19,       17]

CYCLE_YEARS = 120
YEAR_DAYS = 365.25
MONTH_DAYS = 30.44


def _years_for_lord(lord: str) -> float:
    return YEARS[DASHA_ORDER.index(lord)]


@dataclass(frozen=True)
class Duration:
    years: int
    months: int
    days: int

    def as_dict(self) -> dict:
        return {"years": self.years, "months": self.months, "days": self.days}


@dataclass(frozen=True)
class DashaPeriod:
    lord: str
    start_jd: float
    end_jd: float
    years: float

    @property
    def start(self) -> str:
        return jd_to_iso_date(self.start_jd)

    @property
    def end(self) -> str:
        return jd_to_iso_date(self.end_jd)

    def contains(self, jd: float) -> bool:
        return self.start_jd <= jd < self.end_jd


@dataclass(frozen=True)
class BirthBalance:
    nakshatra: int
    progress: float  # fraction of the nakshatra already traversed, [0, 1)
    lord: str
    remaining_years: float
    elapsed_years: float


@dataclass(frozen=True)
class DashaSchedule:
    birth_jd: float
    moon_lon: float
    balance: BirthBalance
    sequence: List[DashaPeriod]

    @property
    def current(self) -> DashaPeriod:
        return self.sequence[0]

    @property
    def elapsed(self) -> Duration:
        return decompose_years(self.balance.elapsed_years)

    @property
    def remaining(self) -> Duration:
        return decompose_years(self.balance.remaining_years)

    @property
    def nakshatra_name(self) -> str:
        return NAKSHATRAS[self.balance.nakshatra]


def decompose_years(years: float) -> Duration:
    """Split fractional years into whole years, months and days."""

    total_days = max(0.0, years) * YEAR_DAYS
    whole_years = int(total_days // YEAR_DAYS)
    rest = total_days - whole_years * YEAR_DAYS
    months = int(rest // MONTH_DAYS)
    days = int(rest - months * MONTH_DAYS)
    return Duration(years=whole_years, months=months, days=days)


def birth_balance(moon_lon: float) -> BirthBalance:
    moon_lon = normalize(moon_lon)
    idx = nakshatra_index(moon_lon)
    progress = min(max(arc_units(moon_lon, 27) - idx, 0.0), 1.0)
    lord = NAKSHATRA_LORDS[idx]
    full = _years_for_lord(lord)
    return BirthBalance(
        nakshatra=idx,
        progress=progress,
        lord=lord,
        remaining_years=full * (1.0 - progress),
        elapsed_years=full * progress,
    )


def compute_vimshottari(birth_jd: float, moon_lon: float) -> DashaSchedule:
    """
    Build the Mahadasha schedule anchored at birth.

    The birth lord only has the untraversed share of its nakshatra left, so
    the first period ends ``remaining_years`` after birth; the next eight
    lords in cyclic order follow with their full years.
    """
    balance = birth_balance(moon_lon)

    periods: List[DashaPeriod] = []
    start = birth_jd
    end = start + balance.remaining_years * YEAR_DAYS
    periods.append(DashaPeriod(balance.lord, start, end, balance.remaining_years))

    lord_idx = DASHA_ORDER.index(balance.lord)
    for _ in range(len(DASHA_ORDER) - 1):
        lord_idx = (lord_idx + 1) % len(DASHA_ORDER)
        lord = DASHA_ORDER[lord_idx]
        years = YEARS[lord_idx]
        start, end = end, end + years * YEAR_DAYS
        periods.append(DashaPeriod(lord, start, end, float(years)))

    return DashaSchedule(birth_jd=birth_jd, moon_lon=normalize(moon_lon), balance=balance, sequence=periods)


def compute_vimshottari_for_positions(birth_jd: float, positions: Iterable) -> DashaSchedule:
    moon = find_body(positions, "Moon")
    if moon is None:
        raise DashaCalculationError("Moon position unavailable; cannot anchor the Vimshottari dasha")
    return compute_vimshottari(birth_jd, moon.lon)


def period_at(schedule: DashaSchedule, jd: float) -> Optional[DashaPeriod]:
    return next((p for p in schedule.sequence if p.contains(jd)), None)
