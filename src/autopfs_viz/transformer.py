"""Data transformer for the job result document.

Transforms the raw ``/json`` document into view models. The transform is
total over malformed leaves: integer fields that do not parse keep their raw
token (with a logged warning), text fields are coerced to strings, bad dates
become ``MISSING_DATE`` and array elements that are not objects are skipped.
Only a document that lacks one of the required top-level arrays is rejected.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from autopfs_viz.models import MISSING_DATE, Character, Job, Message, Session
from autopfs_viz.utils.errors import ModelError
from autopfs_viz.utils.helpers import parse_int, parse_timestamp

REQUIRED_ARRAYS = ("Sessions", "Messages", "Characters")


def parse_date(value: Any, field: str = "date") -> Any:
    """Coerce a date leaf, mapping missing/zero/unparseable values to MISSING_DATE."""
    if value is None or value == "":
        return MISSING_DATE

    parsed = parse_timestamp(value)
    if parsed is None:
        logger.warning(f"failed parsing {field} {value!r} as date")
        return MISSING_DATE
    if parsed.year <= 1:
        return MISSING_DATE
    return parsed


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _objects(values: List[Any], key: str) -> List[Dict[str, Any]]:
    """Keep the object elements of a top-level array, warning about the rest."""
    kept = []
    for i, value in enumerate(values):
        if isinstance(value, dict):
            kept.append(value)
        else:
            logger.warning(f"skipping {key}[{i}]: expected an object, got {value!r}")
    return kept


def _int_list(values: Optional[List[Any]], field: str) -> List[Any]:
    if values is None:
        return []
    if not isinstance(values, list):
        values = [values]
    return [parse_int(v, field) for v in values]


class JobTransformer:
    """Transforms a raw job document into a ``Job``."""

    def transform(self, raw: Dict[str, Any]) -> Job:
        """Transform a raw job document.

        Args:
            raw: Decoded JSON object from the result endpoint

        Returns:
            Job view model

        Raises:
            ModelError: If the document is not an object or lacks one of
                Sessions, Messages, Characters
        """
        if not isinstance(raw, dict):
            raise ModelError(f"job document must be an object, got {type(raw).__name__}")

        for key in REQUIRED_ARRAYS:
            if not isinstance(raw.get(key), list):
                raise ModelError(f"job document has no {key} array")

        job = Job(
            job_id=str(raw.get("JobId") or ""),
            state=_text(raw.get("State")),
            job_date=parse_date(raw.get("JobDate"), "JobDate"),
            sessions=[self.transform_session(s) for s in _objects(raw["Sessions"], "Sessions")],
            messages=[self.transform_message(m) for m in _objects(raw["Messages"], "Messages")],
            characters=[self.transform_character(c) for c in _objects(raw["Characters"], "Characters")],
        )
        logger.info(
            f"Parsed job {job.job_id}: {len(job.sessions)} sessions, "
            f"{len(job.messages)} messages, {len(job.characters)} characters"
        )
        return job

    def transform_session(self, raw: Dict[str, Any]) -> Session:
        return Session(
            date=parse_date(raw.get("Date"), "Date"),
            event_numbers=_int_list(raw.get("EventNumber"), "EventNumber"),
            game=_text(raw.get("Game")),
            season=parse_int(raw.get("Season"), "Season"),
            number=parse_int(raw.get("Number"), "Number"),
            variant=_text(raw.get("Variant")),
            scenario_name=_text(raw.get("ScenarioName")),
            characters=_int_list(raw.get("Character"), "Character"),
            player=bool(raw.get("Player")),
            gm=bool(raw.get("GM")),
        )

    def transform_message(self, raw: Dict[str, Any]) -> Message:
        return Message(
            time=parse_date(raw.get("Time"), "Time"),
            message=_text(raw.get("Message")),
            state=_text(raw.get("State")),
        )

    def transform_character(self, raw: Dict[str, Any]) -> Character:
        return Character(
            system=_text(raw.get("System")),
            number=parse_int(raw.get("Number"), "Character.Number"),
            name=_text(raw.get("Name")),
            prestige=raw.get("Prestige"),
            faction=_text(raw.get("Faction")),
        )


def parse_job(raw: Dict[str, Any]) -> Job:
    """Parse a raw job document into a ``Job``."""
    return JobTransformer().transform(raw)
