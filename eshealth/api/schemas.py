from typing import Any, Dict, Optional
from pydantic import BaseModel, Field

from eshealth.models.health import HealthStatus


class HealthResponse(BaseModel):
    name: str = Field(..., description="Registered name of the health check")
    status: HealthStatus = Field(..., description="healthy, degraded or unhealthy")
    description: Optional[str] = Field(default=None, description="Short human-readable reason")
    data: Dict[str, Any] = Field(
        default_factory=dict, description="Cluster diagnostics, when available"
    )
    error: Optional[str] = Field(
        default=None, description="Exception type of the failure, if any"
    )
