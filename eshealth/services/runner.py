import asyncio
import logging

from eshealth.models.health import HealthCheckContext, HealthCheckRegistration, HealthCheckResult
from eshealth.services.probe import ElasticsearchHealthCheck

log = logging.getLogger(__name__)


async def run_health_check(
    check: ElasticsearchHealthCheck, registration: HealthCheckRegistration
) -> HealthCheckResult:
    """
    Run `check` under `registration`. A registration timeout fires the
    check's cancel signal rather than cancelling the task.
    """
    context = HealthCheckContext(registration=registration)
    cancel = asyncio.Event()
    timer = None
    if registration.timeout is not None:
        timer = asyncio.get_running_loop().call_later(registration.timeout, cancel.set)
    try:
        result = await check.check_health(context, cancel)
    finally:
        if timer is not None:
            timer.cancel()
    log.debug("Health check %s -> %s", registration.name, result.status.value)
    return result
