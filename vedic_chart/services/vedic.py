from .constants import normalize

NAKSHATRAS = [
  "Ashwini","Bharani","Krittika","Rohini","Mrigashira","Ardra","Punarvasu","Pushya","Ashlesha",
  "Magha","Purva Phalguni","Uttara Phalguni","Hasta","Chitra","Swati","Vishakha","Anuradha",
  "Jyeshtha","Mula","Purva Ashadha","Uttara Ashadha","Shravana","Dhanishtha","Shatabhisha",
  "Purva Bhadrapada","Uttara Bhadrapada","Revati"
]

# Vimshottari lord cycle; nakshatra i is ruled by LORD_CYCLE[i % 9]
LORD_CYCLE = ["Ketu","Venus","Sun","Moon","Mars","Rahu","Jupiter","Saturn","Mercury"]
NAKSHATRA_LORDS = [LORD_CYCLE[i % 9] for i in range(27)]

NAKSHATRA_SPAN = 360.0 / 27   # 13°20′
PADA_SPAN = 360.0 / 108       # 3°20′


# a product within this many divisions of a boundary counts as on it
_BOUNDARY_EPS = 1e-12


def arc_units(lon_sid: float, parts: int) -> float:
    """Position on the circle measured in ``parts`` equal divisions, [0, parts]."""
    units = normalize(lon_sid) * parts / 360.0
    nearest = round(units)
    return float(nearest) if abs(units - nearest) < _BOUNDARY_EPS else units


def pada_index(lon_sid: float) -> int:
    """Index of the pada among all 108, counted from 0° Ashwini."""
    return min(int(arc_units(lon_sid, 108)), 107)


def nakshatra_index(lon_sid: float) -> int:
    return pada_index(lon_sid) // 4


def degree_in_nakshatra(lon_sid: float) -> float:
    return max(0.0, normalize(lon_sid) - nakshatra_index(lon_sid) * NAKSHATRA_SPAN)


def pada_of(lon_sid: float) -> int:
    return pada_index(lon_sid) % 4 + 1


def nakshatra_from_lon_sidereal(lon_sid: float) -> dict:
    idx = nakshatra_index(lon_sid)
    return {
        "name": NAKSHATRAS[idx],
        "index": idx,
        "lord": NAKSHATRA_LORDS[idx],
        "pada": pada_of(lon_sid),
    }
