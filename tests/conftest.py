"""Shared fixtures for World Forge CLI tests."""

import json
import logging

import pytest
import structlog

from forge_status.models import ProjectInfo

PROJECT_ID = "prj-0001"


def make_check(
    host: str = "cardinal.us-east.example.com",
    ok: bool = True,
    result_code: int = 200,
    result_str: str = "",
) -> dict:
    return {
        "url": f"https://{host}/health",
        "ok": ok,
        "result_code": result_code,
        "result_str": result_str,
    }


def make_instance(region: str = "us-east", number: int = 1, **overrides) -> dict:
    instance = {
        "region": region,
        "instance": number,
        "cardinal": make_check(f"cardinal-{number}.{region}.example.com"),
        "nakama": make_check(f"nakama-{number}.{region}.example.com"),
    }
    instance.update(overrides)
    return instance


def make_deployment(**overrides) -> dict:
    data = {
        "project_id": PROJECT_ID,
        "type": "deploy",
        "executor_id": "alice",
        "execution_time": "2024-03-05T14:30:00Z",
        "build_number": 42,
        "build_time": "2024-03-05T14:35:10Z",
        "build_state": "finished",
    }
    data.update(overrides)
    return data


def envelope(data) -> bytes:
    return json.dumps({"data": data}).encode()


@pytest.fixture
def project() -> ProjectInfo:
    return ProjectInfo(
        id=PROJECT_ID,
        name="Space Miners",
        slug="space-miners",
        repo_url="https://github.com/example/space-miners",
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration around each test."""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
