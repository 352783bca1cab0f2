"""Pytest configuration and shared fixtures for autopfs-viz tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest

from autopfs_viz.core.state import StateManager
from autopfs_viz.models import Job, Session


def make_session(**overrides: Any) -> Session:
    """Build a session with plausible defaults."""
    values: Dict[str, Any] = {
        "date": datetime(2019, 5, 4, tzinfo=timezone.utc),
        "event_numbers": [],
        "game": "PFS",
        "season": 1,
        "number": 1,
        "variant": "",
        "scenario_name": "The Absalom Initiation",
        "characters": [],
        "player": True,
        "gm": False,
    }
    values.update(overrides)
    return Session(**values)


def make_job(sessions: List[Session], job_id: str = "job-1") -> Job:
    return Job(job_id=job_id, state="done", sessions=list(sessions))


def frame(time: str, message: str = "working", state: str = "running") -> str:
    """Encode one stream payload the way the server pushes it."""
    return json.dumps({"Time": time, "Message": message, "State": state})


@pytest.fixture
def state() -> StateManager:
    return StateManager()


@pytest.fixture
def raw_job() -> Dict[str, Any]:
    """A result document as served by /json."""
    return {
        "JobId": "abc123",
        "State": "done",
        "JobDate": "2020-02-01T10:00:00Z",
        "Sessions": [
            {
                "Date": "2019-05-04T00:00:00Z",
                "EventNumber": [12345, 23456],
                "Game": "PFS",
                "Season": 10,
                "Number": 4,
                "Variant": "",
                "ScenarioName": "The Night March of Kalkamedes",
                "Character": [101, -2],
                "Player": True,
                "GM": True,
            },
            {
                "Date": "2018-11-17T00:00:00Z",
                "EventNumber": [34567],
                "Game": "PFS2",
                "Season": 1,
                "Number": "12",
                "Variant": "Tier 1-4",
                "ScenarioName": "The Blackros Matrix",
                "Character": [202],
                "Player": True,
                "GM": False,
            },
            {
                "Date": "0001-01-01T00:00:00Z",
                "EventNumber": None,
                "Game": "SFS",
                "Season": -1,
                "Number": "abc",
                "Variant": "",
                "ScenarioName": "Quest for the Perfect Planet",
                "Character": [],
                "Player": False,
                "GM": True,
            },
        ],
        "Messages": [
            {"Time": "2020-02-01T10:00:01.123456789Z", "Message": "Logging in", "State": "running"},
        ],
        "Characters": [
            {"System": "PFS", "Number": "101", "Name": "Valeros", "Prestige": 12, "Faction": "Grand Lodge"},
            {"System": "PFS2", "Number": 202, "Name": "Kyra", "Prestige": None, "Faction": "Vigilant Seal"},
        ],
    }
