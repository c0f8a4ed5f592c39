import asyncio
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from conftest import FakeES, RecordingFactory
from eshealth.models.options import ElasticsearchOptions
from eshealth.services.registry import ClientRegistry

A = ElasticsearchOptions(uri="http://a.test:9200")
B = ElasticsearchOptions(uri="http://b.test:9200")


@pytest.mark.asyncio
async def test_one_client_per_uri():
    factory = RecordingFactory()
    registry = ClientRegistry(factory=factory)

    a1 = await registry.get_or_create(A)
    a2 = await registry.get_or_create(A)
    b = await registry.get_or_create(B)

    assert a1 is a2
    assert a1 is not b
    assert len(factory.built) == 2
    assert len(registry) == 2
    assert "http://a.test:9200" in registry


@pytest.mark.asyncio
async def test_losing_insert_uses_cached_client_and_closes_its_own():
    registry = ClientRegistry()
    winner = FakeES()

    def racing_factory(options):
        # another caller finishes its insert while this one is building
        registry._clients.setdefault(options.uri, winner)
        return FakeES()

    registry._factory = racing_factory
    client = await registry.get_or_create(A)

    assert client is winner
    assert len(registry) == 1
    assert not winner.closed


def test_threads_racing_on_one_uri_share_one_cached_client():
    built = []
    lock = threading.Lock()
    start = threading.Barrier(8)

    def slow_factory(options):
        time.sleep(0.02)
        client = FakeES()
        with lock:
            built.append(client)
        return client

    registry = ClientRegistry(factory=slow_factory)

    def probe_once(_):
        start.wait()
        return asyncio.run(registry.get_or_create(A))

    with ThreadPoolExecutor(max_workers=8) as pool:
        clients = list(pool.map(probe_once, range(8)))

    cached = clients[0]
    assert all(c is cached for c in clients)
    assert len(registry) == 1
    assert not cached.closed
    assert all(c.closed for c in built if c is not cached)


@pytest.mark.asyncio
async def test_close_closes_every_client_and_empties_cache():
    factory = RecordingFactory()
    registry = ClientRegistry(factory=factory)
    await registry.get_or_create(A)
    await registry.get_or_create(B)

    await registry.close()

    assert len(registry) == 0
    assert all(c.closed for c in factory.built)
