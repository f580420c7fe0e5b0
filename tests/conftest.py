from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

from probe_service.config import ServiceConfig, reset_config
from probe_service.main import build_app
from tests.fakes import FakeIntrospector, FixedRandom


@pytest.fixture(autouse=True)
def _restore_env():
    before = dict(os.environ)
    reset_config()
    yield
    os.environ.clear()
    os.environ.update(before)
    reset_config()


@pytest.fixture()
def service_config() -> ServiceConfig:
    return ServiceConfig(
        port=3000,
        version="3.0.0",
        environment="test",
        environment_source="APP_ENV",
        namespace="probes",
        pod_name="probe-pod-abc",
        service_account="probe-sa",
        node_name="node-1",
    )


@pytest.fixture()
def introspector() -> FakeIntrospector:
    return FakeIntrospector()


@pytest.fixture()
def rng() -> FixedRandom:
    return FixedRandom(512, 37)


@pytest.fixture()
def client(service_config, introspector, rng):
    app = build_app(service_config, introspector=introspector, rng=rng)
    with TestClient(app) as c:
        yield c
