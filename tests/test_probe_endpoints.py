"""Tests for /health, /ready, /live and /."""

import importlib
import logging
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from probe_service import asgi
from probe_service.config import reset_config
from probe_service.main import build_app


def test_health_returns_snapshot(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "3.0.0"
    assert data["hostname"] == "probe-host"
    assert data["uptime"] == 42.5
    assert data["environment"] == "test"
    assert data["project"] == "DevOps Kubernetes"
    assert data["memory"] == {
        "rss": 50_000_000,
        "heapUsed": 20_000_000,
        "heapTotal": 30_000_000,
    }
    assert data["kubernetes"] == {
        "namespace": "probes",
        "pod_name": "probe-pod-abc",
        "service_account": "probe-sa",
    }


@pytest.mark.parametrize("path", ["/", "/health"])
def test_timestamp_is_iso_datetime(client, path):
    data = client.get(path).json()
    assert data["timestamp"] == "2024-05-01T12:30:45.123Z"
    parsed = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
    assert parsed.year == 2024


@pytest.mark.parametrize("uptime", [0.0, 3.2, 9.999, 10.0])
def test_ready_is_503_until_past_ten_seconds(client, introspector, uptime):
    introspector.uptime_value = uptime
    response = client.get("/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["uptime"] == uptime
    assert data["message"] == "Application is starting up"
    assert "timestamp" in data


@pytest.mark.parametrize("uptime", [10.001, 11.0, 3600.0])
def test_ready_is_200_after_ten_seconds(client, introspector, uptime):
    introspector.uptime_value = uptime
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["uptime"] == uptime
    assert "message" not in data


@pytest.mark.parametrize("uptime", [0.0, 5.0, 10.0, 86400.0])
def test_live_and_health_ignore_process_age(client, introspector, uptime):
    introspector.uptime_value = uptime

    live = client.get("/live")
    assert live.status_code == 200
    assert live.json()["status"] == "alive"
    assert live.json()["pid"] == 4321
    assert live.json()["uptime"] == uptime

    assert client.get("/health").status_code == 200


def test_root_describes_service(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Hello from DevOps Project 3 - Kubernetes!"
    assert data["hostname"] == "probe-host"
    assert data["version"] == "3.0.0"
    assert len(data["features"]) == 6
    assert "Horizontal Pod Autoscaling" in data["features"]
    assert data["kubernetes_info"] == {
        "namespace": "probes",
        "pod_name": "probe-pod-abc",
        "node_name": "node-1",
        "cluster": "devops-project-3",
    }


def test_unknown_route_is_404(client):
    response = client.get("/nope")
    assert response.status_code == 404


def test_post_is_not_allowed(client):
    assert client.post("/health").status_code == 405


def test_startup_banner_logged(service_config, introspector, caplog):
    with caplog.at_level(logging.INFO, logger="probe_service"):
        with TestClient(build_app(service_config, introspector=introspector)):
            pass

    assert "server running on port 3000" in caplog.text
    assert "Health: http://localhost:3000/health" in caplog.text
    assert "Load test: http://localhost:3000/load/5" in caplog.text


def test_asgi_module_exposes_app(monkeypatch):
    monkeypatch.setenv("APP_VERSION", "5.0.0")
    reset_config()
    module = importlib.reload(asgi)
    assert module.app.version == "5.0.0"
    paths = set(module.app.openapi()["paths"])
    assert {"/health", "/ready", "/live", "/", "/load", "/load/{intensity}", "/metrics"} <= paths
