"""
Unit Tests for the JSON Record Store
"""
import json
from datetime import date

import pytest

from flarewatch.core.base import Disease
from flarewatch.core.errors import MalformedRecordError, UnknownRecordKindError
from flarewatch.models.records import FlareRecord, StressRecord
from flarewatch.services.record_store import parse_record, upsert


class TestUpsert:
    """Tests for the pure upsert helper."""

    def test_replace_keeps_position(self):
        records = [
            FlareRecord(id="a", date=date(2024, 6, 1), severity=3),
            FlareRecord(id="b", date=date(2024, 6, 2), severity=4),
            FlareRecord(id="c", date=date(2024, 6, 3), severity=5),
        ]
        replacement = FlareRecord(id="b", date=date(2024, 6, 2), severity=9)
        updated = upsert(records, replacement, key_fn=lambda r: r.id)

        assert [r.id for r in updated] == ["a", "b", "c"]
        assert updated[1].severity == 9
        assert updated[0] is records[0]
        assert records[1].severity == 4

    def test_append_new_key(self):
        records = [FlareRecord(id="a", date=date(2024, 6, 1), severity=3)]
        updated = upsert(records, FlareRecord(id="z", date=date(2024, 6, 5), severity=2), key_fn=lambda r: r.id)
        assert [r.id for r in updated] == ["a", "z"]
        assert len(records) == 1


class TestParseRecord:
    """Tests for parse_record()."""

    def test_malformed_record(self):
        with pytest.raises(MalformedRecordError) as exc_info:
            parse_record("flares", {"date": "2024-06-01", "severity": 42})
        assert exc_info.value.kind == "flares"

    def test_unknown_kind(self):
        with pytest.raises(UnknownRecordKindError):
            parse_record("meals", {})


class TestJsonRecordStore:
    """Tests for JsonRecordStore."""

    def test_missing_file_reads_empty(self, store):
        assert store.read_all("flares") == []
        assert store.get_selected_diseases() == []
        assert store.cached_analysis() is None

    def test_upsert_and_read(self, store):
        record = StressRecord(id="s1", date=date(2024, 6, 1), level=6)
        store.upsert("stress", record, key_fn=lambda r: r.id)
        store.upsert("stress", StressRecord(id="s1", date=date(2024, 6, 1), level=8), key_fn=lambda r: r.id)

        [stored] = store.read_all("stress")
        assert stored.level == 8
        assert store.path.exists()

    def test_malformed_record_discarded(self, store):
        store.path.write_text(json.dumps({
            "flares": [
                {"id": "ok", "date": "2024-06-01", "severity": 5},
                {"date": "2024-06-02", "severity": 42},
                "not a record",
            ]
        }), encoding="utf-8")
        records = store.read_all("flares")
        assert [r.id for r in records] == ["ok"]

    def test_out_of_range_observation_kept(self, store):
        store.path.write_text(json.dumps({
            "observations": [{
                "date": "2024-06-15",
                "fatigue": 10.5,
                "joint_pain": 9,
                "disease_specific": {"rheumatoid_arthritis": {"joint_swelling": 8}},
            }]
        }), encoding="utf-8")
        [observation] = store.read_all("observations")
        assert observation.fatigue == 10.5
        assert observation.disease_specific.rheumatoid_arthritis.joint_swelling == 8

    def test_corrupt_document_treated_as_empty(self, store):
        store.path.write_text("{not json", encoding="utf-8")
        assert store.read_all("flares") == []

        store.upsert("flares", FlareRecord(id="f1", date=date(2024, 6, 1), severity=5), key_fn=lambda r: r.id)
        assert [r.id for r in store.read_all("flares")] == ["f1"]

    def test_non_list_collection_discarded(self, store):
        store.path.write_text(json.dumps({"flares": {"id": "x"}}), encoding="utf-8")
        assert store.read_all("flares") == []

    def test_delete(self, store):
        store.replace_all("flares", [
            FlareRecord(id="f1", date=date(2024, 6, 1), severity=5),
            FlareRecord(id="f2", date=date(2024, 6, 2), severity=6),
        ])
        assert store.delete("flares", "f1") is True
        assert store.delete("flares", "missing") is False
        assert [r.id for r in store.read_all("flares")] == ["f2"]

    def test_unknown_kind(self, store):
        with pytest.raises(UnknownRecordKindError):
            store.read_all("meals")

    def test_selected_diseases(self, store):
        store.set_selected_diseases([Disease.LUPUS, Disease.CROHNS_DISEASE])
        assert store.get_selected_diseases() == [Disease.LUPUS, Disease.CROHNS_DISEASE]

    def test_invalid_selected_diseases_discarded(self, store):
        store.path.write_text(json.dumps({"selected_diseases": ["lupus", "banana"]}), encoding="utf-8")
        assert store.get_selected_diseases() == []

    def test_severity_profile(self, store):
        store.set_severity_profile({"pain_tolerance": 3})
        assert store.get_severity_profile() == {"pain_tolerance": 3}

    def test_collections_are_independent(self, store):
        store.set_selected_diseases([Disease.LUPUS])
        store.upsert("flares", FlareRecord(id="f1", date=date(2024, 6, 1), severity=5), key_fn=lambda r: r.id)
        assert store.get_selected_diseases() == [Disease.LUPUS]
        assert store.read_all("stress") == []
