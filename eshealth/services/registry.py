import logging
from typing import Any, Callable, Dict

from eshealth.clients.elastic import build_client
from eshealth.models.options import ElasticsearchOptions

log = logging.getLogger(__name__)

ClientFactory = Callable[[ElasticsearchOptions], Any]


class ClientRegistry:
    """
    One Elasticsearch client per target URI, shared by every probe that
    points at it.

    Entries are built lazily from the options seen on first use and live
    until `close()`. Inserts go through `dict.setdefault`, which is atomic,
    so concurrent callers never replace an entry: whoever loses the race
    closes the client it built and uses the cached one.
    """

    def __init__(self, factory: ClientFactory = build_client) -> None:
        self._factory = factory
        self._clients: Dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def __contains__(self, uri: object) -> bool:
        return uri in self._clients

    async def get_or_create(self, options: ElasticsearchOptions) -> Any:
        client = self._clients.get(options.uri)
        if client is not None:
            return client

        built = self._factory(options)
        client = self._clients.setdefault(options.uri, built)
        if client is not built:
            log.debug("Discarding duplicate Elasticsearch client for %s", options.uri)
            await built.close()
        else:
            log.debug("Created Elasticsearch client for %s", options.uri)
        return client

    async def close(self) -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.close()
