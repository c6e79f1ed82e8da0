"""HTTP clients for status lookup APIs."""

from monitors.services.base import BaseServiceClient, ServiceError
from monitors.services.mcstatus import McStatusClient, MCSTATUS_API_URL

__all__ = [
    "BaseServiceClient",
    "ServiceError",
    "McStatusClient",
    "MCSTATUS_API_URL",
]
