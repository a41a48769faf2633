import math

SIGN_NAMES = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo","Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

SIGN_SPAN = 30.0


def normalize(lon: float) -> float:
    """Return ``lon`` folded into [0, 360).

    Non-finite values are rejected; they would silently classify as sign 0.
    """

    if not math.isfinite(lon):
        raise ValueError(f"longitude must be finite, got {lon!r}")
    y = lon % 360.0
    # tiny negative inputs round up to exactly 360.0
    if y >= 360.0:
        y = 0.0
    return y


def sign_index_from_lon(lon: float) -> int:
    return min(int(normalize(lon) // SIGN_SPAN), 11)

def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]

def degree_in_sign(lon: float) -> float:
    return max(0.0, normalize(lon) - sign_index_from_lon(lon) * SIGN_SPAN)

def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′"
    sidx = sign_index_from_lon(lon)
    within = degree_in_sign(lon)
    deg = int(within)
    minutes_float = (within - deg) * 60
    mins = int(minutes_float)
    secs = int((minutes_float - mins) * 60)
    return f"{SIGN_NAMES[sidx]} {deg:02d}°{mins:02d}′{secs:02d}″"
