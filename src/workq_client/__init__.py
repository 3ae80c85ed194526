"""Client for the Workq job server protocol."""

from .client import Client, connect
from .config import ClientSettings
from .errors import (
    MalformedResponseError,
    PayloadOrderError,
    ResponseError,
    TransportError,
    WorkqError,
)
from .models.jobs import (
    BackgroundJob,
    ForegroundJob,
    InspectedJob,
    JobResult,
    LeasedJob,
    ScheduledJob,
)
