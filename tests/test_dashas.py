import pytest

from vedic_chart.services import dashas_vimshottari as vim
from vedic_chart.services.errors import DashaCalculationError
from vedic_chart.services.positions import classify
from vedic_chart.services.vedic import NAKSHATRA_LORDS, NAKSHATRA_SPAN

BIRTH_JD = 2451545.0


def test_cycle_is_120_years():
    assert sum(vim.YEARS) == vim.CYCLE_YEARS == 120
    assert vim.DASHA_ORDER == ["Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury"]


def test_moon_at_zero_starts_full_ketu_period():
    schedule = vim.compute_vimshottari(BIRTH_JD, 0.0)
    assert schedule.balance.lord == "Ketu"
    assert schedule.balance.progress == 0.0
    assert schedule.balance.remaining_years == 7.0
    assert schedule.current.start_jd == BIRTH_JD
    assert schedule.current.end_jd == pytest.approx(BIRTH_JD + 7 * vim.YEAR_DAYS)
    assert schedule.current.start == "2000-01-01"
    assert schedule.nakshatra_name == "Ashwini"


def test_balance_runs_out_at_nakshatra_end():
    balance = vim.birth_balance(NAKSHATRA_SPAN - 1e-9)
    assert balance.lord == "Ketu"
    assert balance.remaining_years == pytest.approx(0.0, abs=1e-6)
    assert balance.elapsed_years == pytest.approx(7.0, abs=1e-6)


def test_partial_balance_in_rohini():
    balance = vim.birth_balance(40.5)
    assert balance.lord == "Moon"
    assert balance.progress == pytest.approx(0.5 / NAKSHATRA_SPAN)
    assert balance.remaining_years + balance.elapsed_years == pytest.approx(10.0)
    assert balance.remaining_years == pytest.approx(10.0 * (1 - 0.0375))


def test_sequence_is_contiguous_and_cyclic():
    schedule = vim.compute_vimshottari(BIRTH_JD, 40.5)
    seq = schedule.sequence
    assert len(seq) == 9
    assert [p.lord for p in seq] == ["Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury", "Ketu", "Venus", "Sun"]
    for prev, nxt in zip(seq, seq[1:]):
        assert nxt.start_jd == prev.end_jd
    assert [p.years for p in seq[1:]] == [7.0, 18.0, 16.0, 19.0, 17.0, 7.0, 20.0, 6.0]

    total_years = (seq[-1].end_jd - seq[0].start_jd) / vim.YEAR_DAYS
    assert total_years == pytest.approx(120.0 - schedule.balance.elapsed_years)


def test_next_lord_after_last_nakshatra_wraps_to_ketu():
    schedule = vim.compute_vimshottari(BIRTH_JD, 359.0)
    assert schedule.current.lord == "Mercury"
    assert schedule.sequence[1].lord == "Ketu"


def test_decompose_years():
    assert vim.decompose_years(2.0).as_dict() == {"years": 2, "months": 0, "days": 0}
    assert vim.decompose_years(0.1).as_dict() == {"years": 0, "months": 1, "days": 6}
    assert vim.decompose_years(-1.0).as_dict() == {"years": 0, "months": 0, "days": 0}


def test_period_at():
    schedule = vim.compute_vimshottari(BIRTH_JD, 0.0)
    assert vim.period_at(schedule, BIRTH_JD).lord == "Ketu"
    assert vim.period_at(schedule, BIRTH_JD + 8 * vim.YEAR_DAYS).lord == "Venus"
    assert vim.period_at(schedule, BIRTH_JD - 1) is None
    assert vim.period_at(schedule, schedule.sequence[-1].end_jd) is None


def test_schedule_from_positions_needs_the_moon():
    sun = classify("Sun", 120.0, 0.0, 1.0)
    with pytest.raises(DashaCalculationError):
        vim.compute_vimshottari_for_positions(BIRTH_JD, [sun])

    moon = classify("Moon", 0.0, 0.0, 13.0)
    assert vim.compute_vimshottari_for_positions(BIRTH_JD, [sun, moon]).current.lord == "Ketu"


def test_period_end_round_trips_into_next_lord():
    schedule = vim.compute_vimshottari(BIRTH_JD, 40.5)
    nxt = schedule.sequence[1]
    moon_at_start = NAKSHATRA_LORDS.index(nxt.lord) * NAKSHATRA_SPAN

    again = vim.compute_vimshottari(schedule.current.end_jd, moon_at_start)
    assert again.current.lord == nxt.lord == "Mars"
    assert again.current.start_jd == schedule.current.end_jd
    assert again.current.years == pytest.approx(nxt.years)
    assert again.current.end_jd == pytest.approx(nxt.end_jd)
