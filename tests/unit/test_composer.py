"""
Unit Tests for the Lifestyle Risk Composer
"""
from datetime import date

from flarewatch.core.correlation import (
    FoodRecommendation,
    LifestyleLog,
    LifestyleRiskLevel,
    StressCorrelation,
    analyze_flare_risk,
)
from flarewatch.core.correlation.composer import SIMILAR_PATTERN
from flarewatch.core.correlation.food_reference import ANTI_INFLAMMATORY_SUGGESTION
from flarewatch.core.correlation.lifestyle import FoodCorrelation
from flarewatch.models.records import FlareRecord, FoodRecord, SleepRecord, StressRecord


def _avoid(food: str) -> FoodCorrelation:
    return FoodCorrelation(
        food=food,
        flare_probability=80.0,
        average_hours_to_symptom=12.0,
        recommendation=FoodRecommendation.AVOID,
        message="",
    )


class TestLifestyleRiskLevel:
    """Tests for lifestyle risk tiers."""

    def test_boundaries(self):
        assert LifestyleRiskLevel.from_score(29) == LifestyleRiskLevel.LOW
        assert LifestyleRiskLevel.from_score(30) == LifestyleRiskLevel.MEDIUM
        assert LifestyleRiskLevel.from_score(50) == LifestyleRiskLevel.HIGH
        assert LifestyleRiskLevel.from_score(70) == LifestyleRiskLevel.CRITICAL


class TestAnalyzeFlareRisk:
    """Tests for analyze_flare_risk()."""

    def test_empty_log(self, today):
        analysis = analyze_flare_risk(LifestyleLog(), None, [], None, today)
        assert analysis.risk_score == 0
        assert analysis.risk_level == LifestyleRiskLevel.LOW
        assert analysis.recommendations == ["Maintain your current routine"]
        assert analysis.message == "Flare risk is currently low."

    def test_stress_and_sleep_deficit(self, today):
        data = LifestyleLog(
            stress_records=[
                StressRecord(date=date(2024, 6, 13), level=8),
                StressRecord(date=date(2024, 6, 14), level=9),
            ],
            sleep_records=[SleepRecord(date=date(2024, 6, 14), total_hours=5)],
        )
        analysis = analyze_flare_risk(data, None, [], None, today)
        assert analysis.risk_score == 55
        assert analysis.risk_level == LifestyleRiskLevel.HIGH
        assert analysis.factors.stress and analysis.factors.sleep
        assert not analysis.factors.food
        assert analysis.risk_factors == ["High stress level", "Sleep deficit"]
        assert "Get at least 7.5 hours of sleep" in analysis.recommendations
        assert analysis.message.startswith("Flare risk is high!")

    def test_old_records_ignored(self, today):
        data = LifestyleLog(stress_records=[StressRecord(date=date(2024, 6, 1), level=10)])
        analysis = analyze_flare_risk(data, None, [], None, today)
        assert analysis.risk_score == 0

    def test_records_after_today_ignored(self, today):
        data = LifestyleLog(
            stress_records=[StressRecord(date=date(2024, 6, 20), level=10)],
            sleep_records=[SleepRecord(date=date(2024, 6, 18), total_hours=3)],
            food_records=[FoodRecord(date=date(2024, 6, 16), foods=["dairy"])],
        )
        analysis = analyze_flare_risk(data, None, [_avoid("dairy")], None, today)
        assert analysis.risk_score == 0
        assert not analysis.factors.stress
        assert not analysis.factors.sleep
        assert not analysis.factors.food

    def test_trigger_food(self, today):
        data = LifestyleLog(food_records=[FoodRecord(date=date(2024, 6, 14), foods=["dairy", "rice"])])
        analysis = analyze_flare_risk(data, None, [_avoid("dairy"), _avoid("sugar")], None, today)
        assert analysis.risk_score == 25
        assert analysis.factors.food
        assert analysis.risk_factors == ["Trigger foods eaten: dairy"]
        assert analysis.recommendations == ["Avoid these foods: dairy", ANTI_INFLAMMATORY_SUGGESTION]

    def test_similar_pattern_to_last_flare(self, today):
        """Stress, sleep and food close to the three days before the last flare."""
        data = LifestyleLog(
            flares=[
                FlareRecord(date=date(2024, 5, 1), severity=6),
                FlareRecord(date=date(2024, 6, 1), severity=7),
            ],
            stress_records=[
                StressRecord(date=date(2024, 5, 30), level=5),
                StressRecord(date=date(2024, 6, 14), level=5.5),
            ],
            sleep_records=[
                SleepRecord(date=date(2024, 5, 30), total_hours=7),
                SleepRecord(date=date(2024, 6, 14), total_hours=7.5),
            ],
            food_records=[
                FoodRecord(date=date(2024, 5, 30), foods=["rice"]),
                FoodRecord(date=date(2024, 6, 14), foods=["rice"]),
            ],
        )
        analysis = analyze_flare_risk(data, None, [], None, today)
        assert analysis.factors.pattern
        assert analysis.risk_score == 20
        assert analysis.risk_factors == [SIMILAR_PATTERN]
        assert "This resembles the days before your last flare." in analysis.message

    def test_pattern_needs_two_flares(self, today):
        data = LifestyleLog(
            flares=[FlareRecord(date=date(2024, 6, 1), severity=7)],
            stress_records=[
                StressRecord(date=date(2024, 5, 30), level=5),
                StressRecord(date=date(2024, 6, 14), level=5),
            ],
            sleep_records=[
                SleepRecord(date=date(2024, 5, 30), total_hours=7),
                SleepRecord(date=date(2024, 6, 14), total_hours=7),
            ],
        )
        analysis = analyze_flare_risk(data, None, [], None, today)
        assert not analysis.factors.pattern
        assert analysis.risk_score == 0

    def test_stress_lag_quoted(self, today):
        data = LifestyleLog(stress_records=[StressRecord(date=date(2024, 6, 14), level=9)])
        correlation = StressCorrelation(
            correlation=0.8, average_days_to_flare=2.0, high_stress_flare_count=3, message="",
        )
        analysis = analyze_flare_risk(data, correlation, [], None, today)
        assert analysis.risk_score == 30
        assert analysis.risk_level == LifestyleRiskLevel.MEDIUM
        assert "Your flares have typically followed high stress by 2 day(s)." in analysis.message

    def test_score_capped(self, today):
        data = LifestyleLog(
            flares=[
                FlareRecord(date=date(2024, 5, 1), severity=6),
                FlareRecord(date=date(2024, 6, 1), severity=7),
            ],
            stress_records=[
                StressRecord(date=date(2024, 5, 30), level=9),
                StressRecord(date=date(2024, 6, 14), level=9),
            ],
            sleep_records=[
                SleepRecord(date=date(2024, 5, 30), total_hours=4),
                SleepRecord(date=date(2024, 6, 14), total_hours=4),
            ],
            food_records=[
                FoodRecord(date=date(2024, 5, 30), foods=["dairy"]),
                FoodRecord(date=date(2024, 6, 14), foods=["dairy"]),
            ],
        )
        analysis = analyze_flare_risk(data, None, [_avoid("dairy")], None, today)
        assert analysis.risk_score == 100
        assert analysis.risk_level == LifestyleRiskLevel.CRITICAL
        assert all(analysis.factors.to_dict().values())
