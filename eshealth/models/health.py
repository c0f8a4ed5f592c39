from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
    HEALTHY = "healthy"


class HealthCheckRegistration(BaseModel):
    """
    How the embedding application registered a check: its name, the status
    to report when it fails, and an optional timeout (seconds) after which
    the check is cancelled.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    failure_status: HealthStatus = HealthStatus.UNHEALTHY
    timeout: Optional[float] = Field(default=None, gt=0)
    tags: List[str] = Field(default_factory=list)


class HealthCheckContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    registration: HealthCheckRegistration


class HealthCheckResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: HealthStatus
    description: Optional[str] = None
    exception: Optional[BaseException] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def healthy(cls, description: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> "HealthCheckResult":
        return cls(status=HealthStatus.HEALTHY, description=description, data=data or {})

    @classmethod
    def degraded(cls, description: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> "HealthCheckResult":
        return cls(status=HealthStatus.DEGRADED, description=description, data=data or {})
