"""Shared test fixtures for the helm-values-lsp test suite."""

from __future__ import annotations

import pytest

from helm_values_lsp.cache import ValueCache
from helm_values_lsp.flattener import to_value_node
from helm_values_lsp.provider import FetchErrorKind, ValueFetchError
from helm_values_lsp.source import HelmValuesSource

JENKINS_VALUES = {
    "controller": {
        "image": {"repository": "jenkins/jenkins", "tag": "2.440"},
        "numExecutors": 0,
        "admin": {"createSecret": True},
    },
    "agent": {"enabled": True, "replicas": 1},
    "nameOverride": "",
    "persistence": {"enabled": True, "size": "8Gi"},
}

NGINX_VALUES = {
    "replicaCount": 1,
    "service": {"type": "ClusterIP", "port": 80},
}


class FakeProvider:
    """Provider serving canned values trees and counting fetches."""

    def __init__(self, charts=None, errors=None):
        self.charts = {name: to_value_node(data) for name, data in (charts or {}).items()}
        self.errors = dict(errors or {})
        self.calls: list[str] = []

    def fetch(self, chart_ref):
        self.calls.append(chart_ref)
        if chart_ref in self.errors:
            raise self.errors[chart_ref]
        if chart_ref not in self.charts:
            raise ValueFetchError(FetchErrorKind.EXECUTION_FAILED, f"chart {chart_ref} not found")
        return self.charts[chart_ref]


@pytest.fixture
def provider():
    """Provider knowing the jenkins and nginx charts."""
    return FakeProvider({"jenkins/jenkins": JENKINS_VALUES, "bitnami/nginx": NGINX_VALUES})


@pytest.fixture
def cache():
    """A fresh cache, isolated from the process-wide one."""
    return ValueCache()


@pytest.fixture
def source(provider, cache):
    return HelmValuesSource(provider=provider, cache=cache)


@pytest.fixture
def jenkins_tree():
    return to_value_node(JENKINS_VALUES)


@pytest.fixture
def fake_provider_cls():
    """The FakeProvider class, for tests building their own charts."""
    return FakeProvider


@pytest.fixture
def server(provider, cache):
    """A language server whose completions come from the fake provider."""
    from helm_values_lsp.server import create_server

    server = create_server(helm_path="helm")
    server.source = HelmValuesSource(provider=provider, cache=cache)
    return server
