import pytest

from conftest import DEFAULT_TROPICAL, FakeProvider
from vedic_chart.services import views
from vedic_chart.services.chart import BirthRecord, ChartEngine
from vedic_chart.services.errors import (
    DashaCalculationError,
    HouseCalculationError,
    InvalidLocationInput,
    InvalidTimeInput,
    UnknownBodyError,
    UnsupportedAyanamsa,
)

# 17:30 at +05:30 is the J2000 epoch
RECORD = BirthRecord(date="2000-01-01", time="17:30", tz="+05:30", lat=17.385, lon=78.4867)


def test_compute_chart_end_to_end(fake_provider):
    result = ChartEngine(fake_provider, ayanamsha="lahiri", node="true").compute_chart(RECORD)

    assert result.jd_utc == pytest.approx(2451545.0)
    assert result.ascendant.sign_name == "Cancer"
    assert result.cusps[0] == 90.0
    assert len(result.houses) == 12 and result.houses[0]["sign"] == "Cancer"
    assert [p.name for p in result.positions][-2:] == ["Rahu", "Ketu"]
    assert result.dasha.current.lord == "Sun"  # Moon in Krittika
    assert result.dasha.current.start_jd == result.jd_utc

    kinds = {(a.body, a.other): a.type for a in result.aspects}
    assert kinds[("Sun", "Mars")] == "square"
    assert kinds[("Moon", "Rahu")] == "conjunction"
    assert any(a.other == "Sun" for a in result.aspects_index["Mars"])


def test_chart_view_shape(fake_provider):
    result = ChartEngine(fake_provider, ayanamsha="lahiri", node="true").compute_chart(RECORD)
    data = views.chart_view(RECORD, result, as_of="2001-01-01", backend="fake")

    assert data["chart_id"].startswith("cht_")
    assert data["chart_id"] == views.chart_id(RECORD, "lahiri", "true")
    assert data["meta"]["zodiac"] == "sidereal" and data["meta"]["house_system"] == "whole_sign"
    mars = next(b for b in data["bodies"] if b["name"] == "Mars")
    assert mars["house"] == 5 and mars["sign"] == "Scorpio"
    assert {"planet": "Sun", "type": "square", "orb": 0.0} in mars["aspects"]
    orbs = [a["orb"] for a in data["aspects"]]
    assert orbs == sorted(orbs)
    assert data["dasha"]["running"]["lord"] == "Sun"
    assert len(data["dasha"]["sequence"]) == 9


def test_ayanamsha_model_reaches_provider(fake_provider):
    engine = ChartEngine(fake_provider, ayanamsha="KP")
    engine.ascendant(RECORD)
    assert fake_provider.ayanamsa_calls == ["krishnamurti"]


def test_unknown_ayanamsha_rejected(fake_provider):
    with pytest.raises(UnsupportedAyanamsa):
        ChartEngine(fake_provider, ayanamsha="fagan-bradley")


def test_node_type_falls_back_to_env(monkeypatch, fake_provider):
    monkeypatch.setenv("NODE_TYPE", "mean")
    engine = ChartEngine(fake_provider)
    assert engine.node == "mean"
    rahu = next(p for p in engine.positions(RECORD) if p.name == "Rahu")
    assert rahu.lon == 41.0


def test_ascendant_failure_is_fatal_for_chart_but_not_dasha():
    provider = FakeProvider(positions=DEFAULT_TROPICAL, ascendant=None)
    engine = ChartEngine(provider, ayanamsha="lahiri", node="true")
    with pytest.raises(HouseCalculationError):
        engine.compute_chart(RECORD)
    assert engine.dasha_schedule(RECORD).current.lord == "Sun"
    assert engine.nakshatra_of(RECORD, "Moon")["nakshatra"] == "Krittika"


def test_dasha_without_moon_raises():
    provider = FakeProvider(positions=DEFAULT_TROPICAL, ascendant=95.0, failing={"Moon"})
    engine = ChartEngine(provider, ayanamsha="lahiri", node="true")
    with pytest.raises(DashaCalculationError):
        engine.dasha_schedule(RECORD)
    with pytest.raises(DashaCalculationError):
        engine.compute_chart(RECORD)


def test_nakshatra_of(fake_provider):
    engine = ChartEngine(fake_provider, ayanamsha="lahiri", node="true")
    found = engine.nakshatra_of(RECORD, "moon")
    assert found["planet"] == "Moon"
    assert found["nakshatra"] == "Krittika" and found["lord"] == "Sun" and found["pada"] == 3
    assert found["degree"] == pytest.approx(34.0 - 360.0 / 27 * 2)

    with pytest.raises(UnknownBodyError):
        engine.nakshatra_of(RECORD, "Pluto")


def test_nakshatra_of_unavailable_body_is_none():
    provider = FakeProvider(positions=DEFAULT_TROPICAL, failing={"Saturn"})
    assert ChartEngine(provider, ayanamsha="lahiri").nakshatra_of(RECORD, "Saturn") is None


@pytest.mark.parametrize("lat,lon", [(95.0, 0.0), (-90.5, 10.0), (0.0, 181.0), (float("nan"), 0.0)])
def test_invalid_location(fake_provider, lat, lon):
    record = BirthRecord(date="2000-01-01", time="12:00", tz="UTC", lat=lat, lon=lon)
    with pytest.raises(InvalidLocationInput):
        ChartEngine(fake_provider).compute_chart(record)
    assert fake_provider.ayanamsa_calls == []


def test_invalid_time(fake_provider):
    record = BirthRecord(date="2000-02-30", time="12:00", tz="UTC", lat=0.0, lon=0.0)
    with pytest.raises(InvalidTimeInput):
        ChartEngine(fake_provider).positions(record)
