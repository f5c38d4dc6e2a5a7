"""
Unit Tests for Correlation Module

Tests for the statistics helpers, stress/food/sleep correlations and the
emotion-flare correlation.
"""
from datetime import date, time

import pytest

from flarewatch.core.base import AnalysisStatus
from flarewatch.core.correlation import (
    FoodRecommendation,
    analyze_emotion_correlation,
    analyze_food_correlation,
    analyze_sleep_correlation,
    analyze_stress_correlation,
    iso_week_key,
    pearson,
)
from flarewatch.core.correlation.food_reference import inflammatory_score, is_anti_inflammatory
from flarewatch.core.correlation.lifestyle import INSUFFICIENT_MESSAGE, MIN_RECOMMENDED_SLEEP
from flarewatch.models.records import (
    EmotionRecord,
    FlareRecord,
    FoodRecord,
    SleepRecord,
    StressRecord,
    SymptomsAfterMeal,
)


def _flare(day: date, severity: int = 5) -> FlareRecord:
    return FlareRecord(date=day, severity=severity)


def _emotion(day: date, value: float) -> EmotionRecord:
    return EmotionRecord(date=day, depression=value, anxiety=value, stress=value, isolation=value)


class TestStats:
    """Tests for pearson() and ISO week keys."""

    def test_perfect_correlation(self):
        assert pearson([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
        assert pearson([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_bounded(self):
        r = pearson([1, 5, 2, 8, 3], [2, 1, 7, 3, 9])
        assert -1.0 <= r <= 1.0

    def test_degenerate_inputs(self):
        assert pearson([3, 3, 3], [1, 2, 3]) == 0.0
        assert pearson([1, 2], [1, 2, 3]) == 0.0
        assert pearson([], []) == 0.0

    def test_iso_week_key(self):
        assert iso_week_key(date(2024, 1, 1)) == "2024-W01"
        # Jan 3rd 2021 belongs to the last ISO week of 2020
        assert iso_week_key(date(2021, 1, 3)) == "2020-W53"


class TestFoodReference:
    """Tests for the static food tables."""

    def test_case_insensitive_lookup(self):
        assert inflammatory_score("Dairy") == 0.7
        assert inflammatory_score("  fried   food ") == 0.6
        assert inflammatory_score("rice") == 0.0

    def test_anti_inflammatory(self):
        assert is_anti_inflammatory("Salmon")
        assert not is_anti_inflammatory("sugar")


class TestStressCorrelation:
    """Tests for analyze_stress_correlation()."""

    def test_no_flares_and_no_stress_records(self):
        result = analyze_stress_correlation([], [])
        assert result.status == AnalysisStatus.INSUFFICIENT_DATA
        assert result.correlation == 0.0
        assert result.average_days_to_flare == 0.0
        assert result.high_stress_flare_count == 0
        assert result.message == INSUFFICIENT_MESSAGE

    def test_insufficient_data(self):
        result = analyze_stress_correlation([], [StressRecord(date=date(2024, 6, 1), level=5)])
        assert result.status == AnalysisStatus.INSUFFICIENT_DATA
        assert result.message == INSUFFICIENT_MESSAGE
        assert result.correlation == 0.0

    def test_high_stress_week_precedes_flare(self):
        stress = [
            StressRecord(date=date(2024, 6, 3), level=2),
            StressRecord(date=date(2024, 6, 10), level=9),
            StressRecord(date=date(2024, 6, 17), level=3),
        ]
        result = analyze_stress_correlation([_flare(date(2024, 6, 12))], stress)
        assert result.status == AnalysisStatus.OK
        assert result.correlation > 0.9
        assert result.high_stress_flare_count == 1
        assert result.average_days_to_flare == 2.0
        assert "1 flare(s) occurred in high-stress weeks" in result.message
        assert "2 day(s)" in result.message

    def test_no_high_stress_weeks(self):
        stress = [StressRecord(date=date(2024, 6, 3), level=4), StressRecord(date=date(2024, 6, 4), level=4)]
        result = analyze_stress_correlation([_flare(date(2024, 6, 5))], stress)
        assert result.high_stress_flare_count == 0
        assert result.average_days_to_flare == 0.0
        assert result.message == "No clear pattern between stress and flares was found."


class TestFoodCorrelation:
    """Tests for analyze_food_correlation()."""

    def test_no_food_records(self, today):
        assert analyze_food_correlation([_flare(today)], [], today) == []

    def test_meal_before_flare(self, today):
        flares = [_flare(date(2024, 6, 10))]
        foods = [
            FoodRecord(date=date(2024, 6, 9), time=time(12, 0), foods=["dairy", "salmon"]),
            FoodRecord(date=date(2024, 6, 1), foods=["salmon"]),
        ]
        results = analyze_food_correlation(flares, foods, today)
        assert [r.food for r in results] == ["dairy", "salmon"]

        dairy, salmon = results
        assert dairy.flare_probability == 100.0
        assert dairy.recommendation == FoodRecommendation.AVOID
        assert dairy.message == "100% chance of worsening within 24 hours after eating dairy"
        assert salmon.flare_probability == 50.0
        assert salmon.recommendation == FoodRecommendation.MODERATE
        assert salmon.occurrences == 2

    def test_meal_after_flare_onset_not_counted(self, today):
        """Flares are dated to midnight, so a lunch that day comes after it."""
        flares = [_flare(date(2024, 6, 10))]
        foods = [FoodRecord(date=date(2024, 6, 10), time=time(12, 0), foods=["rice"])]
        [rice] = analyze_food_correlation(flares, foods, today)
        assert rice.flare_probability == 0.0
        assert rice.recommendation == FoodRecommendation.SAFE
        assert rice.message == "rice appears safe to eat."

    def test_symptom_onset_hours(self, today):
        foods = [
            FoodRecord(date=date(2024, 6, 9), foods=["tomato"],
                       symptoms_after=SymptomsAfterMeal(hours=3, symptoms=["bloating"])),
            FoodRecord(date=date(2024, 6, 11), foods=["tomato"],
                       symptoms_after=SymptomsAfterMeal(hours=6)),
        ]
        [tomato] = analyze_food_correlation([], foods, today)
        assert tomato.average_hours_to_symptom == 4.5

    def test_reduced_intake_note(self, today):
        foods = [FoodRecord(date=date(2024, 1, 1), foods=["sugar"])]
        [sugar] = analyze_food_correlation([], foods, today)
        assert sugar.recommendation == FoodRecommendation.AVOID
        assert sugar.message.endswith("Flare frequency appears reduced since cutting back on sugar")

    def test_repeatable(self, today):
        flares = [_flare(date(2024, 6, 10))]
        foods = [FoodRecord(date=date(2024, 6, 9), foods=["dairy", "rice"])]
        first = [c.to_dict() for c in analyze_food_correlation(flares, foods, today)]
        second = [c.to_dict() for c in analyze_food_correlation(flares, foods, today)]
        assert first == second


class TestSleepCorrelation:
    """Tests for analyze_sleep_correlation()."""

    def test_insufficient_data(self):
        result = analyze_sleep_correlation([_flare(date(2024, 6, 10))], [])
        assert result.status == AnalysisStatus.INSUFFICIENT_DATA
        assert result.recommended_hours == MIN_RECOMMENDED_SLEEP

    def test_pre_flare_nights_only(self):
        """Every sample is paired with a flare, so there is no variance to correlate."""
        sleep = [
            SleepRecord(date=date(2024, 6, 8), total_hours=5),
            SleepRecord(date=date(2024, 6, 9), total_hours=6),
            SleepRecord(date=date(2024, 6, 1), total_hours=9),
        ]
        result = analyze_sleep_correlation([_flare(date(2024, 6, 10))], sleep)
        assert result.correlation == 0.0
        assert result.samples == [6, 5]
        assert "No clear relationship" in result.message

    def test_recommended_hours_follow_average(self):
        sleep = [SleepRecord(date=date(2024, 6, 9), total_hours=8)]
        result = analyze_sleep_correlation([_flare(date(2024, 6, 10))], sleep)
        assert result.recommended_hours == 8.5

    def test_recommended_hours_floor(self):
        sleep = [SleepRecord(date=date(2024, 6, 9), total_hours=5)]
        result = analyze_sleep_correlation([_flare(date(2024, 6, 10))], sleep)
        assert result.recommended_hours == 7.5


class TestEmotionCorrelation:
    """Tests for analyze_emotion_correlation()."""

    def test_no_emotion_records(self):
        result = analyze_emotion_correlation([], [_flare(date(2024, 6, 10))], date(2024, 6, 28))
        assert result.status == AnalysisStatus.INSUFFICIENT_DATA
        assert result.weeks == []

    def test_alternating_weeks(self):
        today = date(2024, 6, 28)
        emotions = [
            _emotion(date(2024, 6, 3), 8),
            _emotion(date(2024, 6, 10), 2),
            _emotion(date(2024, 6, 17), 8),
            _emotion(date(2024, 6, 24), 2),
        ]
        flares = [_flare(date(2024, 6, 4)), _flare(date(2024, 6, 18))]
        result = analyze_emotion_correlation(emotions, flares, today)

        assert [w.start for w in result.weeks] == [
            date(2024, 6, 1), date(2024, 6, 8), date(2024, 6, 15), date(2024, 6, 22),
        ]
        assert [w.emotion_score for w in result.weeks] == [8.0, 2.0, 8.0, 2.0]
        assert [w.flare_occurred for w in result.weeks] == [True, False, True, False]
        assert result.correlation == 1.0
        assert result.message.startswith("Strong positive correlation")

    def test_window_includes_today(self):
        today = date(2024, 6, 28)
        result = analyze_emotion_correlation([_emotion(today, 6)], [], today, week_count=1)
        assert result.weeks[0].emotion_score == 6.0
        assert result.correlation == 0.0

    def test_weeks_without_records_score_zero(self):
        today = date(2024, 6, 28)
        result = analyze_emotion_correlation([_emotion(date(2024, 6, 27), 4)], [], today)
        assert [w.emotion_score for w in result.weeks] == [0.0, 0.0, 0.0, 4.0]
        assert result.to_dict()["week_data"][0]["date"] == "2024-06-01"
