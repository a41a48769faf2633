import pytest

from vedic_chart.services.ephem import RawPosition
from vedic_chart.services.errors import HouseCalculationError, PositionCalculationError


class FakeProvider:
    """In-memory ephemeris provider with fixed tropical values."""

    backend = "fake"

    def __init__(self, positions=None, ascendant=0.0, ayanamsa=0.0, failing=()):
        self.positions = dict(positions or {})
        self.asc = ascendant
        self.ayan = ayanamsa
        self.failing = set(failing)
        self.position_calls = []
        self.ayanamsa_calls = []

    def position(self, jd_utc, body):
        self.position_calls.append(body)
        if body in self.failing or body not in self.positions:
            raise PositionCalculationError(f"{body} unavailable", body=body)
        lon, lat, speed = self.positions[body]
        return RawPosition(lon=lon, lat=lat, speed=speed)

    def ascendant(self, jd_utc, lat, lon):
        if self.asc is None:
            raise HouseCalculationError("no ascendant")
        return self.asc

    def ayanamsa(self, jd_utc, model):
        self.ayanamsa_calls.append(model)
        return self.ayan


DEFAULT_TROPICAL = {
    "Sun": (120.0, 0.0, 0.95),
    "Moon": (34.0, 1.2, 13.1),
    "Mercury": (130.0, -1.0, -0.4),
    "Venus": (150.0, 0.5, 1.1),
    "Mars": (210.0, 0.2, 0.6),
    "Jupiter": (95.0, 0.1, 0.2),
    "Saturn": (300.0, -0.5, -0.05),
    "TrueNode": (40.0, 0.0, -0.053),
    "MeanNode": (41.0, 0.0, -0.053),
}


@pytest.fixture
def fake_provider():
    return FakeProvider(positions=DEFAULT_TROPICAL, ascendant=95.0, ayanamsa=0.0)
