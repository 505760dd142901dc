# ABOUTME: Tests for quality score calculation
# ABOUTME: Validates component scoring, mandatory caps, clamping, and labels

from datetime import datetime, timezone

import pytest

from surfscore.forecast.models import RawHourlyReading
from surfscore.scoring.calculator import ScoreCalculator, angular_distance, score_to_label
from surfscore.spots.profiles import SpotProfile, get_spot_profile

LIDO = get_spot_profile("lido")  # target 145 +/- 35, tide 0.5-2.5ft
TS = datetime(2025, 10, 19, 12, 0, tzinfo=timezone.utc)


def _reading(**kwargs) -> RawHourlyReading:
    return RawHourlyReading(spot_id="lido", timestamp=TS, **kwargs)


class TestSwellEnergy:
    """Tests for the 0-40 swell energy component"""

    @pytest.mark.parametrize("height,period,points", [
        (0.5, 5, 5),     # 5.6
        (1.5, 5.5, 15),  # 19.3
        (3.0, 4, 25),    # 24
        (2.0, 8, 32),    # 45.3
        (4.0, 12, 40),   # 166.3
    ])
    def test_energy_buckets(self, height, period, points):
        assert ScoreCalculator().score_swell_energy(height, period) == points


class TestDirection:
    """Tests for the direction fit component"""

    def test_missing_direction_is_neutral(self):
        assert ScoreCalculator().score_direction(None, LIDO) == 10

    def test_within_tolerance(self):
        assert ScoreCalculator().score_direction(150, LIDO) == 20

    def test_tolerance_multiples(self):
        """Points fall off at 1.5x, 2x, and 2.5x the tolerance"""
        calculator = ScoreCalculator()

        assert calculator.score_direction(190, LIDO) == 14  # 45 off, <= 52.5
        assert calculator.score_direction(205, LIDO) == 8   # 60 off, <= 70
        assert calculator.score_direction(225, LIDO) == 4   # 80 off, <= 87.5
        assert calculator.score_direction(250, LIDO) == 2   # 105 off

    def test_east_band_penalty(self):
        """East swells lose 4 points after the tolerance lookup"""
        assert ScoreCalculator().score_direction(100, LIDO) == 10  # 45 off -> 14, minus 4

    def test_east_band_penalty_below_floor(self):
        """On top of the 2-point floor the penalty reaches floor minus 4"""
        west_facing = SpotProfile(
            key="west",
            name="West Facing",
            latitude=34.0,
            longitude=-118.5,
            swell_target_deg=260,
            swell_tolerance_deg=20,
            tide_optimal_min_ft=1.0,
            tide_optimal_max_ft=3.0,
            min_period_s=6,
            amplification_factor=1.2,
        )

        assert ScoreCalculator().score_direction(95, west_facing) == -2

    def test_angular_distance_wraps(self):
        assert angular_distance(350, 10) == 20
        assert angular_distance(10, 350) == 20
        assert angular_distance(0, 180) == 180


class TestTide:
    """Tests for the tide fit component"""

    def test_missing_tide_is_neutral(self):
        assert ScoreCalculator().score_tide(None, LIDO) == 10

    def test_inside_optimal_range(self):
        assert ScoreCalculator().score_tide(1.5, LIDO) == 20
        assert ScoreCalculator().score_tide(2.5, LIDO) == 20

    def test_just_outside_range(self):
        assert ScoreCalculator().score_tide(2.9, LIDO) == 12
        assert ScoreCalculator().score_tide(0.1, LIDO) == 12

    def test_far_outside_range(self):
        assert ScoreCalculator().score_tide(4.0, LIDO) == 4


class TestWind:
    """Tests for wind classification and scoring"""

    def test_classification_south_facing(self):
        calculator = ScoreCalculator()

        assert calculator.classify_wind(0, LIDO) == "offshore"
        assert calculator.classify_wind(330, LIDO) == "offshore"
        assert calculator.classify_wind(45, LIDO) == "offshore"
        assert calculator.classify_wind(90, LIDO) == "cross-shore"
        assert calculator.classify_wind(270, LIDO) == "cross-shore"
        assert calculator.classify_wind(180, LIDO) == "onshore"
        assert calculator.classify_wind(None, LIDO) is None

    def test_classification_rotates_with_shore_normal(self):
        """A west-facing beach (270) is offshore in an east wind"""
        west_facing = SpotProfile(
            key="west",
            name="West Facing",
            latitude=34.0,
            longitude=-118.5,
            swell_target_deg=260,
            swell_tolerance_deg=20,
            tide_optimal_min_ft=1.0,
            tide_optimal_max_ft=3.0,
            min_period_s=6,
            amplification_factor=1.2,
            shore_facing_deg=270,
        )

        assert ScoreCalculator().classify_wind(90, west_facing) == "offshore"
        assert ScoreCalculator().classify_wind(270, west_facing) == "onshore"

    def test_missing_wind_is_neutral(self):
        calculator = ScoreCalculator()

        assert calculator.score_wind(None, 0, LIDO) == 0
        assert calculator.score_wind(10, None, LIDO) == 0

    @pytest.mark.parametrize("speed,direction,points", [
        (8, 0, 20),
        (12, 0, 20),
        (15, 0, 15),
        (18, 0, 15),
        (25, 0, 10),
        (10, 90, -5),
        (15, 90, -12),
        (22, 270, -20),
        (8, 180, -10),
        (12, 180, -25),
        (20, 180, -40),
    ])
    def test_speed_bands(self, speed, direction, points):
        assert ScoreCalculator().score_wind(speed, direction, LIDO) == points


class TestCalculate:
    """Tests for the combined score"""

    def test_pumping_offshore_day_scores_all_time(self):
        """Big long-period swell, ideal direction, good tide, light offshore"""
        reading = _reading(
            primary_height_ft=4.0, primary_period_s=12, primary_direction_deg=150,
            wind_speed_kt=5, wind_direction_deg=0,
            tide_height_ft=1.5,
        )

        result = ScoreCalculator().calculate(reading, LIDO)

        assert result.score == 100
        assert result.label == "All-Time"
        assert result.breakdown.as_dict() == {"swell": 40, "direction": 20, "tide": 20, "wind": 20}

    def test_short_period_caps_at_twenty(self):
        """Period under 5s caps the total at 20"""
        reading = _reading(primary_height_ft=3.0, primary_period_s=4)

        result = ScoreCalculator().calculate(reading, LIDO)

        assert result.breakdown.total == 45
        assert result.score == 20

    def test_small_short_period_caps_at_fifteen(self):
        """Height under 2ft with period under 6s caps the total at 15"""
        reading = _reading(primary_height_ft=1.5, primary_period_s=5.5)

        result = ScoreCalculator().calculate(reading, LIDO)

        assert result.breakdown.total == 35
        assert result.score == 15

    def test_onshore_blown_out(self):
        reading = _reading(
            primary_height_ft=2.0, primary_period_s=8, primary_direction_deg=145,
            wind_speed_kt=20, wind_direction_deg=180,
            tide_height_ft=5.0,
        )

        result = ScoreCalculator().calculate(reading, LIDO)

        assert result.score == 16  # 32 + 20 + 4 - 40
        assert result.label == "Flat"
        assert "onshore" in result.reason

    def test_negative_total_clamps_to_zero(self):
        reading = _reading(
            primary_height_ft=0.5, primary_period_s=5, primary_direction_deg=300,
            wind_speed_kt=20, wind_direction_deg=180,
            tide_height_ft=5.0,
        )

        result = ScoreCalculator().calculate(reading, LIDO)

        assert result.breakdown.total < 0
        assert result.score == 0

    def test_no_swell_data_is_flat(self):
        result = ScoreCalculator().calculate(_reading(), LIDO)

        assert result.score <= 20
        assert result.reason == "No swell data."

    @pytest.mark.parametrize("height", [0.0, 0.5, 2.0, 6.0, 15.0])
    @pytest.mark.parametrize("period", [2, 5, 6, 9, 13, 20])
    @pytest.mark.parametrize("wind", [(None, None), (5, 0), (25, 180), (15, 90)])
    def test_score_always_in_range(self, height, period, wind):
        """Scores stay within 0-100 for any combination"""
        speed, direction = wind
        reading = _reading(
            primary_height_ft=height, primary_period_s=period, primary_direction_deg=95,
            wind_speed_kt=speed, wind_direction_deg=direction,
        )

        result = ScoreCalculator().calculate(reading, LIDO)

        assert 0 <= result.score <= 100
        if period < 5:
            assert result.score <= 20


class TestLabels:
    """Tests for the canonical 6-bin label scale"""

    @pytest.mark.parametrize("score,label", [
        (0, "Flat"),
        (20, "Flat"),
        (21, "Don't Bother"),
        (40, "Don't Bother"),
        (41, "Worth a Look"),
        (60, "Worth a Look"),
        (61, "Actually Fun"),
        (75, "Actually Fun"),
        (76, "Clear the Calendar"),
        (90, "Clear the Calendar"),
        (91, "All-Time"),
        (100, "All-Time"),
    ])
    def test_label_boundaries(self, score, label):
        assert score_to_label(score) == label
