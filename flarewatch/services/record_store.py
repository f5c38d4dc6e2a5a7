"""
Record Store - JSON-backed persistence for flare records

One JSON document holds every collection. Reads tolerate damaged data:
a record that no longer parses is dropped with a warning, and an unreadable
document is treated as empty.
"""
import logging
import json
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from flarewatch.config import settings
from flarewatch.core.base import Disease
from flarewatch.core.errors import MalformedRecordError, UnknownRecordKindError
from flarewatch.models.records import (
    EmotionRecord,
    EnvironmentalReading,
    FlareDiaryEntry,
    FlareRecord,
    FoodRecord,
    SleepRecord,
    StressRecord,
    SymptomObservation,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)

RECORD_KINDS: Dict[str, Type[BaseModel]] = {
    "observations": SymptomObservation,
    "flares": FlareRecord,
    "stress": StressRecord,
    "food": FoodRecord,
    "sleep": SleepRecord,
    "emotions": EmotionRecord,
    "diary": FlareDiaryEntry,
    "environment": EnvironmentalReading,
}

SELECTED_DISEASES_KEY = "selected_diseases"
SEVERITY_PROFILE_KEY = "severity_profile"
ANALYSIS_CACHE_KEY = "analysis_cache"


def upsert(collection: Sequence[R], record: R, key_fn: Callable[[R], Hashable]) -> List[R]:
    """
    Replace the record sharing ``record``'s key, or append it.

    The replaced record keeps its position; every other record is untouched.
    """
    key = key_fn(record)
    result = []
    replaced = False
    for existing in collection:
        if key_fn(existing) == key:
            if not replaced:
                result.append(record)
                replaced = True
            continue
        result.append(existing)
    if not replaced:
        result.append(record)
    return result


def record_model(kind: str) -> Type[BaseModel]:
    try:
        return RECORD_KINDS[kind]
    except KeyError:
        raise UnknownRecordKindError(
            f"Unknown record kind: {kind}. Valid: {sorted(RECORD_KINDS)}"
        )


def parse_record(kind: str, raw: Any) -> BaseModel:
    """
    Parse one stored record.

    Raises:
        MalformedRecordError: If the data does not fit the record model
    """
    model = record_model(kind)
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedRecordError(kind, f"{e.error_count()} validation error(s)") from e


class JsonRecordStore:
    """
    Read-all / replace-all store over a single JSON file.

    Read-modify-write operations run under a lock so concurrent request
    handlers cannot interleave writes.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else Path(settings.data_dir) / settings.store_file
        self._lock = threading.Lock()
        logger.info(f"Record store at {self.path}")

    # ------------------------------------------------------------------
    # Document I/O
    # ------------------------------------------------------------------

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read record store {self.path}, starting empty: {e}")
            return {}
        if not isinstance(document, dict):
            logger.warning(f"Record store {self.path} is not a JSON object, starting empty")
            return {}
        return document

    def _save(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)

    def _parse_collection(self, kind: str, raw_records: Any) -> List[BaseModel]:
        if not isinstance(raw_records, list):
            logger.warning(f"Discarding {kind} collection: expected a list")
            return []
        records = []
        for raw in raw_records:
            try:
                records.append(parse_record(kind, raw))
            except MalformedRecordError as e:
                logger.warning(f"Discarding record: {e}")
        return records

    @staticmethod
    def _dump(records: Sequence[BaseModel]) -> List[Dict[str, Any]]:
        return [r.model_dump(mode="json") for r in records]

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def read_all(self, kind: str) -> List[BaseModel]:
        """All parseable records of one kind, in stored order."""
        record_model(kind)
        with self._lock:
            document = self._load()
        return self._parse_collection(kind, document.get(kind, []))

    def replace_all(self, kind: str, records: Sequence[BaseModel]) -> None:
        """Overwrite a whole collection."""
        record_model(kind)
        with self._lock:
            document = self._load()
            document[kind] = self._dump(records)
            self._save(document)
        logger.info(f"Stored {len(records)} {kind} record(s)")

    def upsert(self, kind: str, record: BaseModel, key_fn: Callable[[Any], Hashable]) -> List[BaseModel]:
        """Keyed upsert of one record; returns the updated collection."""
        record_model(kind)
        with self._lock:
            document = self._load()
            current = self._parse_collection(kind, document.get(kind, []))
            updated = upsert(current, record, key_fn)
            document[kind] = self._dump(updated)
            self._save(document)
        return updated

    def delete(self, kind: str, record_id: str) -> bool:
        """Remove a record by id. Returns False when nothing matched."""
        record_model(kind)
        with self._lock:
            document = self._load()
            current = self._parse_collection(kind, document.get(kind, []))
            remaining = [r for r in current if getattr(r, "id", None) != record_id]
            if len(remaining) == len(current):
                return False
            document[kind] = self._dump(remaining)
            self._save(document)
        return True

    # ------------------------------------------------------------------
    # Profile data
    # ------------------------------------------------------------------

    def get_selected_diseases(self) -> List[Disease]:
        with self._lock:
            raw = self._load().get(SELECTED_DISEASES_KEY, [])
        try:
            return TypeAdapter(List[Disease]).validate_python(raw)
        except ValidationError as e:
            logger.warning(f"Discarding stored disease selection: {e.error_count()} error(s)")
            return []

    def set_selected_diseases(self, diseases: Sequence[Disease]) -> None:
        with self._lock:
            document = self._load()
            document[SELECTED_DISEASES_KEY] = [Disease(d).value for d in diseases]
            self._save(document)

    def get_severity_profile(self) -> Dict[str, Any]:
        """Self-assessed flare severity answers; display data only."""
        with self._lock:
            profile = self._load().get(SEVERITY_PROFILE_KEY, {})
        return profile if isinstance(profile, dict) else {}

    def set_severity_profile(self, profile: Dict[str, Any]) -> None:
        with self._lock:
            document = self._load()
            document[SEVERITY_PROFILE_KEY] = dict(profile)
            self._save(document)

    def cache_analysis(self, analysis: Dict[str, Any]) -> None:
        """Store the latest derived analysis. Always re-derivable."""
        with self._lock:
            document = self._load()
            document[ANALYSIS_CACHE_KEY] = analysis
            self._save(document)

    def cached_analysis(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            cached = self._load().get(ANALYSIS_CACHE_KEY)
        return cached if isinstance(cached, dict) else None
