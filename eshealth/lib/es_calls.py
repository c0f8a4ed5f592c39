import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Optional, Union

from elasticsearch import ApiError, TransportError, UnsupportedProductError

from eshealth.core.errors import ProbeCancelled
from eshealth.models.cluster import ClusterHealth

HTTP_OK = 200

# ---------------- Call outcomes ----------------------------------


@dataclass(frozen=True)
class Success:
    status_code: int
    cluster: Optional[ClusterHealth] = None


@dataclass(frozen=True)
class NonSuccessStatus:
    status_code: int


@dataclass(frozen=True)
class TransportFailure:
    error: BaseException


@dataclass(frozen=True)
class MappingFailure:
    error: BaseException


Outcome = Union[Success, NonSuccessStatus, TransportFailure, MappingFailure]

# ---------------- Cancellation -----------------------------------


async def _cancellable(call: Awaitable[Any], cancel: Optional[asyncio.Event]) -> Any:
    """
    Await `call`, abandoning it if `cancel` fires first.

    Raises ProbeCancelled when the signal wins; the in-flight call is
    cancelled and awaited so nothing is left running.
    """
    if cancel is None:
        return await call

    if cancel.is_set():
        if asyncio.iscoroutine(call):
            call.close()
        raise ProbeCancelled("cancelled before the request was sent")

    task = asyncio.ensure_future(call)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task.done():
        return task.result()

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    raise ProbeCancelled("cancelled while waiting for Elasticsearch")


def _status_of(resp: Any) -> int:
    return int(resp.meta.status)

# ---------------- Remote calls -----------------------------------


async def ping(client: Any, cancel: Optional[asyncio.Event] = None) -> Outcome:
    """
    HEAD / against the cluster.

    Goes through perform_request rather than client.ping(), which reports
    only True/False and hides the HTTP status.
    """
    try:
        resp = await _cancellable(
            client.perform_request("HEAD", "/", headers={"accept": "application/json"}),
            cancel,
        )
    except UnsupportedProductError as exc:
        return MappingFailure(exc)
    except ApiError as exc:
        return NonSuccessStatus(exc.meta.status)
    except (TransportError, ProbeCancelled) as exc:
        return TransportFailure(exc)

    status = _status_of(resp)
    if status != HTTP_OK:
        return NonSuccessStatus(status)
    return Success(status)


async def cluster_health(client: Any, cancel: Optional[asyncio.Event] = None) -> Outcome:
    """GET /_cluster/health, parsed into ClusterHealth."""
    try:
        resp = await _cancellable(client.cluster.health(), cancel)
    except UnsupportedProductError as exc:
        return MappingFailure(exc)
    except ApiError as exc:
        return NonSuccessStatus(exc.meta.status)
    except (TransportError, ProbeCancelled) as exc:
        return TransportFailure(exc)

    status = _status_of(resp)
    if status != HTTP_OK:
        return NonSuccessStatus(status)

    body = getattr(resp, "body", resp)
    try:
        cluster = ClusterHealth.model_validate(dict(body))
    except (ValueError, TypeError) as exc:  # includes pydantic ValidationError
        return MappingFailure(exc)
    return Success(status, cluster)
