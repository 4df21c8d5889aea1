from __future__ import annotations

import json
import logging

import pytest

from telemetron.app import create_app
from telemetron.bootstrap import build_context
from telemetron.config import AppConfig, SimulationConfig, load_config
from telemetron.logging_setup import JsonFormatter, resolve_level


@pytest.fixture()
def clean_env(monkeypatch):
    for key in (
        "SERVER_HOST",
        "SERVER_PORT",
        "LOG_LEVEL",
        "CACHE_TTL_SECONDS",
        "ENABLE_MOCK_DATA",
        "AGENT_ACTIVITY_INTERVAL_SECONDS",
        "TELEMETRON_INSTANCE_ID",
        "TELEMETRON_ENVIRONMENT",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_load_config_defaults(clean_env):
    cfg = load_config()
    assert cfg.server.port == 8080
    assert cfg.server.host == "0.0.0.0"
    assert cfg.log_level == "info"
    assert cfg.cache_ttl_seconds == 0
    assert cfg.simulation.enable_mock_data is True
    assert cfg.simulation.activity_interval == 5.0
    assert cfg.extras["instance_id"] == "telemetron-local"


def test_load_config_reads_environment(clean_env):
    clean_env.setenv("SERVER_PORT", "9090")
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    clean_env.setenv("CACHE_TTL_SECONDS", "0")
    clean_env.setenv("ENABLE_MOCK_DATA", "false")
    clean_env.setenv("AGENT_ACTIVITY_INTERVAL_SECONDS", "0.5")
    cfg = load_config()
    assert cfg.server.port == 9090
    assert cfg.log_level == "debug"
    assert cfg.cache_ttl_seconds == 0
    assert cfg.simulation.enable_mock_data is False
    assert cfg.simulation.activity_interval == 0.5


def test_invalid_values_fall_back_to_defaults(clean_env):
    clean_env.setenv("SERVER_PORT", "not-a-port")
    clean_env.setenv("ENABLE_MOCK_DATA", "maybe")
    clean_env.setenv("AGENT_ACTIVITY_INTERVAL_SECONDS", "-1")
    cfg = load_config()
    assert cfg.server.port == 8080
    assert cfg.simulation.enable_mock_data is True
    assert cfg.simulation.activity_interval == 5.0


def test_build_context_without_mock_data_serves_empty_fleet():
    cfg = AppConfig(cache_ttl_seconds=0, simulation=SimulationConfig(enable_mock_data=False))
    ctx = build_context(cfg)
    try:
        state = ctx.service.get_system_state()
        assert state.id == "system-1"
        assert state.agents == ()
        assert state.workload == ()
        assert state.queues == ()
        assert state.litellm == ()
    finally:
        ctx.shutdown()
    assert ctx.service.agents.closed


def test_create_app_serves_seeded_state():
    cfg = AppConfig(cache_ttl_seconds=0)
    ctx = build_context(cfg)
    app = create_app(context=ctx)
    try:
        resp = app.test_client().get("/system/state")
        assert resp.status_code == 200
        assert resp.get_json()["agents"][0]["name"] == "agent-1"
        assert app.config["TELEMETRON_CONFIG"] is cfg
    finally:
        ctx.shutdown()
        ctx.shutdown()


def test_default_config_serves_agent_activity_changes_immediately():
    ctx = build_context(AppConfig())
    client = create_app(context=ctx).test_client()
    try:
        first = client.get("/system/state").get_json()["agents"][0]["activity"]
        ctx.service.agents.tick()
        second = client.get("/system/state").get_json()["agents"][0]["activity"]
    finally:
        ctx.shutdown()
    assert [t["status"] for t in first["active_task_ids"]] == ["running", "pending"]
    statuses = [t["status"] for t in second["active_task_ids"]]
    assert len(set(statuses)) == 1
    assert statuses != ["running", "pending"]


def test_resolve_level_handles_unknown_names():
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("warning") == logging.WARNING
    assert resolve_level("chatty") == logging.INFO


def test_json_formatter_emits_one_object_per_line():
    record = logging.LogRecord("telemetron.test", logging.INFO, __file__, 10, "hello %s", ("fleet",), None)
    line = JsonFormatter().format(record)
    data = json.loads(line)
    assert data["message"] == "hello fleet"
    assert data["level"] == "INFO"
    assert data["logger"] == "telemetron.test"
    assert "\n" not in line
