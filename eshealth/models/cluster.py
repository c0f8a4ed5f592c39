from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClusterStatus(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


class ClusterHealth(BaseModel):
    """
    Body of GET /_cluster/health. Only `status` is required; the rest is
    carried through as diagnostics.
    """

    model_config = ConfigDict(extra="allow")

    status: ClusterStatus = Field(..., description="Aggregate cluster status")
    cluster_name: Optional[str] = None
    timed_out: bool = False
    number_of_nodes: int = 0
    number_of_data_nodes: int = 0
    active_shards: int = 0
    unassigned_shards: int = 0
