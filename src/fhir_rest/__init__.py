from .async_client import AsyncClient, AsyncSearchSet, Task, TaskState
from .backends import GoogleHealthcareTransport, HttpTransport, Transport
from .client import Client
from .config import ClientConfig, GoogleHealthcareConfig
from .errors import (
    ConfigError,
    FHIRClientError,
    HttpError,
    PreconditionError,
    TransportError,
)
from .reference import Reference
from .resource import Resource
from .searchset import SearchSet

__all__ = [
    "Client",
    "AsyncClient",
    "Task",
    "TaskState",
    "Resource",
    "Reference",
    "SearchSet",
    "AsyncSearchSet",
    "ClientConfig",
    "GoogleHealthcareConfig",
    "Transport",
    "HttpTransport",
    "GoogleHealthcareTransport",
    "FHIRClientError",
    "ConfigError",
    "PreconditionError",
    "HttpError",
    "TransportError",
]
