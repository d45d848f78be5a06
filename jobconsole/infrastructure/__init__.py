"""Infrastructure layer exports."""

from .gateway import RemoteGatewayClient
from .jobs_api import JobsApi

__all__ = [
    "JobsApi",
    "RemoteGatewayClient",
]
