import asyncio
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

from eshealth.models.health import HealthCheckContext, HealthCheckRegistration, HealthStatus
from eshealth.models.options import ElasticsearchOptions
from eshealth.services.registry import ClientRegistry

GREEN_BODY = {
    "cluster_name": "igsr",
    "status": "green",
    "timed_out": False,
    "number_of_nodes": 3,
    "number_of_data_nodes": 3,
    "active_shards": 10,
    "unassigned_shards": 0,
}


class FakeResponse:
    """Looks enough like an elastic_transport ApiResponse for the probe."""

    def __init__(self, status: int, body: Any = None):
        self.meta = SimpleNamespace(status=status)
        self.body = body


class _FakeCluster:
    def __init__(self, es: "FakeES"):
        self._es = es

    async def health(self, **kwargs):
        self._es.calls.append("cluster.health")
        return await self._es._respond(self._es._health_ret, self._es._health_exc)


class FakeES:
    """Minimal AsyncElasticsearch stub: HEAD / via perform_request, cluster.health, close."""

    def __init__(
        self,
        *,
        ping_ret: Optional[FakeResponse] = None,
        ping_exc: Optional[BaseException] = None,
        health_ret: Optional[FakeResponse] = None,
        health_exc: Optional[BaseException] = None,
        delay: float = 0.0,
    ):
        self._ping_ret = ping_ret or FakeResponse(200)
        self._ping_exc = ping_exc
        self._health_ret = health_ret or FakeResponse(200, dict(GREEN_BODY))
        self._health_exc = health_exc
        self._delay = delay
        self.calls: List[str] = []
        self.cancelled = False
        self.closed = False
        self.cluster = _FakeCluster(self)

    async def _respond(self, ret, exc):
        if self._delay:
            try:
                await asyncio.sleep(self._delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if exc is not None:
            raise exc
        return ret

    async def perform_request(self, method: str, path: str, **kwargs):
        self.calls.append(f"{method} {path}")
        return await self._respond(self._ping_ret, self._ping_exc)

    async def close(self):
        self.closed = True


class RecordingFactory:
    """Client factory that hands out a given fake and counts builds."""

    def __init__(self, make=None):
        self._make = make or FakeES
        self.built: List[Any] = []
        self.seen_options: List[ElasticsearchOptions] = []

    def __call__(self, options: ElasticsearchOptions):
        self.seen_options.append(options)
        client = self._make()
        self.built.append(client)
        return client


def make_context(failure_status: HealthStatus = HealthStatus.UNHEALTHY, **kwargs) -> HealthCheckContext:
    return HealthCheckContext(
        registration=HealthCheckRegistration(name="elasticsearch", failure_status=failure_status, **kwargs)
    )


@pytest.fixture()
def context():
    return make_context()


@pytest.fixture()
def ping_options():
    return ElasticsearchOptions(uri="http://es.test:9200")


@pytest.fixture()
def cluster_options():
    return ElasticsearchOptions(uri="http://es.test:9200", use_cluster_health_api=True)


@pytest.fixture()
def registry_for():
    """registry_for(fake) -> (ClientRegistry, RecordingFactory) always building `fake`."""

    def _build(fake):
        factory = RecordingFactory(lambda: fake)
        return ClientRegistry(factory=factory), factory

    return _build
