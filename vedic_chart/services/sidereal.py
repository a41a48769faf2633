from __future__ import annotations

import os

from .constants import normalize
from .errors import UnsupportedAyanamsa

AYANAMSHA_MODELS = ("lahiri", "krishnamurti", "raman")
AYANAMSHA_ALIASES = {"kp": "krishnamurti", "chitrapaksha": "lahiri"}


def default_model() -> str:
    return resolve_model(os.getenv("AYANAMSHA") or "lahiri")


def resolve_model(name: str | None) -> str:
    if not name:
        return default_model()
    key = name.strip().lower()
    key = AYANAMSHA_ALIASES.get(key, key)
    if key not in AYANAMSHA_MODELS:
        raise UnsupportedAyanamsa(
            f"Unsupported ayanamsha {name!r}; expected one of {', '.join(AYANAMSHA_MODELS)}"
        )
    return key


def ayanamsa(provider, jd_utc: float, model: str = "lahiri") -> float:
    """Precession correction for ``jd_utc`` under ``model``.

    The model is handed to the provider on every call; nothing is set globally.
    """

    return provider.ayanamsa(jd_utc, resolve_model(model))


def to_sidereal(tropical_lon: float, ayanamsa_deg: float) -> float:
    return normalize(tropical_lon - ayanamsa_deg)
