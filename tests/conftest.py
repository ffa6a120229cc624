"""Shared Newman run summaries for the test suite."""

import copy
from datetime import datetime

import pytest

START = datetime(2024, 5, 1, 9, 30, 0)

FAILED_ASSERTION = {
    "name": "AssertionError",
    "message": "expected 200 got 404",
    "stack": "AssertionError: expected 200 got 404\n    at Object.eval test.js:1:1",
}

SAMPLE_SUMMARY = {
    "collection": {
        "id": "col-1",
        "name": "Echo API",
        "item": [
            {"id": "g-users", "name": "Users", "item": [
                {"id": "g-admin", "name": "Admin", "item": [
                    {"id": "i-admin", "name": "Get admin"},
                ]},
                {"id": "i-list", "name": "List users"},
            ]},
            {"id": "i-health", "name": "Health"},
        ],
    },
    "run": {
        "stats": {"tests": {"total": 3, "failed": 1}},
        "executions": [
            {
                "item": {"id": "i-admin", "name": "Get admin"},
                "cursor": {"iteration": 0, "position": 0, "length": 3},
                "request": {"url": {"protocol": "http", "host": ["postman-echo", "com"]}},
                "response": {"responseTime": 250},
                "assertions": [
                    {"assertion": "Status is 200", "skipped": False},
                    {"assertion": "Body has id", "skipped": False, "error": FAILED_ASSERTION},
                ],
                "prerequestScript": [{}],
                "testScript": [{}],
            },
            {
                "item": {"id": "i-list", "name": "List users"},
                "cursor": {"iteration": 0, "position": 1, "length": 3},
                "request": {"url": {"host": ["api", "example", "org"]}},
                "response": {"responseTime": 100},
                "assertions": [{"assertion": "Response is JSON"}],
                "prerequestScript": [],
                "testScript": [{"error": {
                    "name": "ReferenceError",
                    "message": "x is not defined",
                    "stack": "ReferenceError: x is not defined",
                }}],
            },
            {
                "item": {"id": "i-health", "name": "Health"},
                "cursor": {"iteration": 0, "position": 2, "length": 3},
                "request": {"url": {}},
                "requestError": {
                    "name": "Error",
                    "message": "connect ECONNREFUSED 127.0.0.1:80",
                    "stack": "Error: connect ECONNREFUSED 127.0.0.1:80",
                },
            },
        ],
    },
    "globals": {"values": [{"key": "a", "value": "1"}, {"key": "token", "value": "abc"}]},
    "environment": {"values": [{"key": "a", "value": "2"}]},
}


def single_execution_summary(execution: dict, **extra) -> dict:
    """A one-request run with the given execution, at the collection root."""
    summary = {
        "collection": {"id": "col-1", "name": "Single", "item": [{"id": "i-1", "name": "Ping"}]},
        "run": {"executions": [{
            "item": {"id": "i-1", "name": "Ping"},
            "cursor": {"iteration": 0, "position": 0, "length": 1},
            **execution,
        }]},
    }
    summary.update(extra)
    return summary


@pytest.fixture
def summary() -> dict:
    return copy.deepcopy(SAMPLE_SUMMARY)
