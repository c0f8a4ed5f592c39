"""
Elasticsearch health check
==========================

Resolves a cached client for the configured URI, makes one remote call
(ping or cluster health) and folds the outcome into a HealthCheckResult.
"""

import asyncio
import logging
from typing import Optional

from eshealth.lib.es_calls import (
    MappingFailure,
    NonSuccessStatus,
    Outcome,
    TransportFailure,
    cluster_health,
    ping,
)
from eshealth.models.cluster import ClusterStatus
from eshealth.models.health import HealthCheckContext, HealthCheckResult
from eshealth.models.options import ElasticsearchOptions
from eshealth.services.registry import ClientRegistry

log = logging.getLogger(__name__)


class ElasticsearchHealthCheck:
    def __init__(self, options: ElasticsearchOptions, registry: ClientRegistry) -> None:
        if options is None:
            raise TypeError("options is required")
        self._options = options
        self._registry = registry

    async def check_health(
        self, context: HealthCheckContext, cancel: Optional[asyncio.Event] = None
    ) -> HealthCheckResult:
        """
        Probe the cluster once and report healthy, degraded or the
        registration's failure status.

        Never raises for ordinary errors: client construction and call
        failures come back as the failure status with the exception
        attached.
        """
        failure_status = context.registration.failure_status
        try:
            client = await self._registry.get_or_create(self._options)
            if self._options.use_cluster_health_api:
                outcome = await cluster_health(client, cancel)
            else:
                outcome = await ping(client, cancel)
            return self._fold(outcome, context)
        except Exception as exc:
            log.warning(
                "Health check %s could not reach %s: %r",
                context.registration.name, self._options.uri, exc,
            )
            return HealthCheckResult(status=failure_status, description=str(exc) or None, exception=exc)

    def _fold(self, outcome: Outcome, context: HealthCheckContext) -> HealthCheckResult:
        failure_status = context.registration.failure_status
        name = context.registration.name

        if isinstance(outcome, TransportFailure):
            log.warning("Health check %s: transport failure: %r", name, outcome.error)
            return HealthCheckResult(status=failure_status, description="Elasticsearch unreachable", exception=outcome.error)

        if isinstance(outcome, NonSuccessStatus):
            log.warning("Health check %s: HTTP %s", name, outcome.status_code)
            return HealthCheckResult(
                status=failure_status,
                description=f"Elasticsearch returned HTTP {outcome.status_code}",
                data={"status_code": outcome.status_code},
            )

        if isinstance(outcome, MappingFailure):
            log.warning("Health check %s: unreadable response: %r", name, outcome.error)
            return HealthCheckResult(status=failure_status, description="Unrecognised Elasticsearch response", exception=outcome.error)

        if outcome.cluster is None:
            return HealthCheckResult.healthy()

        cluster = outcome.cluster
        data = cluster.model_dump(mode="json")
        if cluster.status is ClusterStatus.GREEN:
            return HealthCheckResult.healthy(data=data)
        if cluster.status is ClusterStatus.YELLOW:
            return HealthCheckResult.degraded(description="Cluster status is yellow", data=data)
        log.warning("Health check %s: cluster status %s", name, cluster.status.value)
        return HealthCheckResult(status=failure_status, description=f"Cluster status is {cluster.status.value}", data=data)
