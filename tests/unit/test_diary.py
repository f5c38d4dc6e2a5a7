"""
Unit Tests for Flare Diary Analysis

Tests for trigger mining and the hospital report.
"""
from datetime import date, time

import pytest

from flarewatch.core.diary import (
    TriggerCategory,
    Trend,
    generate_hospital_report,
    update_flare_triggers,
)
from flarewatch.core.diary.triggers import categorize_trigger, trigger_id, trigger_recommendation
from flarewatch.models.records import (
    EnvironmentalReading,
    FlareDiaryEntry,
    FoodRecord,
    LabResult,
    Medication,
    SleepRecord,
    StressRecord,
)


@pytest.fixture
def diary():
    return [
        FlareDiaryEntry(
            date=date(2024, 6, 10),
            severity=6,
            estimated_triggers=["Stress", "Weather change"],
            medications=[Medication(name="methotrexate"), Medication(name="folic acid", adherence=False)],
            test_results=[LabResult(name="CRP", value="10", unit="mg/L", date=date(2024, 6, 10))],
        ),
        FlareDiaryEntry(
            date=date(2024, 6, 20),
            severity=4,
            estimated_triggers=["Stress"],
            medications=[Medication(name="methotrexate")],
            test_results=[LabResult(name="CRP", value="5", unit="mg/L", date=date(2024, 6, 20))],
        ),
    ]


class TestTriggerHelpers:
    """Tests for trigger categorization and ids."""

    def test_categories(self):
        assert categorize_trigger("Late night meal") == TriggerCategory.FOOD
        assert categorize_trigger("Work stress") == TriggerCategory.STRESS
        assert categorize_trigger("Cold weather") == TriggerCategory.ENVIRONMENT
        assert categorize_trigger("Poor sleep") == TriggerCategory.SLEEP
        assert categorize_trigger("Infection") == TriggerCategory.OTHER

    def test_recommendations(self):
        assert trigger_recommendation("Dairy") == "Avoid dairy products"
        assert trigger_recommendation("Infection") == "Avoid this factor where possible"

    def test_trigger_id_is_slug(self):
        assert trigger_id("High stress") == "high-stress"
        assert trigger_id("Coffee & milk intake") == "coffee-milk-intake"


class TestUpdateFlareTriggers:
    """Tests for update_flare_triggers()."""

    def test_empty_diary(self):
        stress = [StressRecord(date=date(2024, 6, 1), level=9)]
        assert update_flare_triggers([], stress, [], [], []) == []

    def test_mines_diary_and_logs(self, diary):
        stress = [
            StressRecord(date=date(2024, 6, 8), level=8),
            StressRecord(date=date(2024, 6, 19), level=7),
            StressRecord(date=date(2024, 6, 18), level=3),
        ]
        foods = [FoodRecord(date=date(2024, 6, 9), time=time(18, 0), foods=["dairy"])]
        sleep = [SleepRecord(date=date(2024, 6, 19), total_hours=5)]
        environment = [EnvironmentalReading(date=date(2024, 6, 20), temperature=32, humidity=60, pressure=1010)]

        triggers = update_flare_triggers(diary, stress, foods, sleep, environment)
        assert [t.name for t in triggers] == [
            "Stress", "High stress", "Weather change", "dairy intake", "Sleep deficit", "Extreme temperature",
        ]

        by_name = {t.name: t for t in triggers}
        assert by_name["Stress"].frequency == 2
        assert by_name["Stress"].confidence == 100.0
        assert by_name["High stress"].frequency == 2
        assert by_name["High stress"].last_occurrence == date(2024, 6, 20)
        assert by_name["dairy intake"].category == TriggerCategory.FOOD
        assert by_name["dairy intake"].confidence == 50.0
        assert by_name["dairy intake"].recommendation == "Avoid or cut down on dairy"
        assert by_name["Weather change"].category == TriggerCategory.ENVIRONMENT
        assert by_name["Extreme temperature"].last_occurrence == date(2024, 6, 20)

    def test_limit(self, diary):
        stress = [StressRecord(date=date(2024, 6, 9), level=9)]
        triggers = update_flare_triggers(diary, stress, [], [], [], limit=2)
        assert len(triggers) == 2

    def test_mild_temperature_ignored(self, diary):
        environment = [EnvironmentalReading(date=date(2024, 6, 10), temperature=20, humidity=50, pressure=1013)]
        triggers = update_flare_triggers(diary, [], [], [], environment)
        assert "Extreme temperature" not in [t.name for t in triggers]

    def test_to_dict(self, diary):
        data = update_flare_triggers(diary, [], [], [], [])[0].to_dict()
        assert data["id"] == "stress"
        assert data["category"] == "stress"
        assert data["last_occurrence"] == "2024-06-20"


class TestHospitalReport:
    """Tests for generate_hospital_report()."""

    def test_report_period(self, diary):
        old = FlareDiaryEntry(date=date(2024, 4, 1), severity=9, estimated_triggers=["Infection"])
        report = generate_hospital_report(diary + [old], date(2024, 6, 30), 30)

        assert report.period_start == date(2024, 5, 31)
        assert report.period_end == date(2024, 6, 30)
        assert report.flare_count == 2
        assert report.average_severity == 5.0
        assert report.medication_adherence == 67
        assert [t.name for t in report.top_triggers] == ["Stress", "Weather change"]
        assert report.top_triggers[0].confidence == 100.0

    def test_lab_trend(self, diary):
        report = generate_hospital_report(diary, date(2024, 6, 30), 30)
        [crp] = report.test_results
        assert crp.name == "CRP"
        assert [v["value"] for v in crp.values] == ["10", "5"]
        assert crp.trend == Trend.IMPROVING

    def test_summary(self, diary):
        report = generate_hospital_report(diary, date(2024, 6, 30), 30)
        assert report.summary.startswith("Over the last 30 days: 2 flare(s), average severity 5.0/10.")
        assert "Main triggers: Stress, Weather change." in report.summary
        assert report.summary.endswith("Medication adherence 67%.")

    def test_empty_period(self):
        report = generate_hospital_report([], date(2024, 6, 30))
        assert report.flare_count == 0
        assert report.average_severity == 0.0
        assert report.medication_adherence == 0
        assert report.summary == "Over the last 30 days: 0 flare(s), average severity 0.0/10. Medication adherence 0%."
