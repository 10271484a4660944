"""Python client for the ConvertKit (Kit) v4 API."""

from loguru import logger

from .cache import ResourceCache
from .client import ConvertKitClient
from .config import ClientSettings
from .credentials import Credential, LegacyKeyCredential, OAuthCredential
from .exceptions import (
    APIError,
    ClientError,
    ConfigurationError,
    ConvertKitError,
    InvalidArgumentError,
    MalformedResponseError,
    ServerError,
    TransportError,
)
from .executor import RequestExecutor
from .headers import build_headers
from .logging_setup import DebugLogger
from .models import ListPage, LogEntry, PaginationCursor, RequestSpec, ResponseEnvelope, TokenSet
from .oauth import build_authorize_url
from .pagination import PaginationParams, iterate_items, iterate_pages
from .resources import GrowthStatsRange, SubscriberFilters, SubscriptionFilters
from .response_parser import classify_error
from .version import __version__

# Library diagnostics stay silent unless the application opts in with logger.enable("convertkit_api")
logger.disable(__name__)

__all__ = [
    "__version__",
    "ConvertKitClient",
    "ClientSettings",
    "Credential",
    "LegacyKeyCredential",
    "OAuthCredential",
    "RequestExecutor",
    "RequestSpec",
    "ResponseEnvelope",
    "TokenSet",
    "PaginationCursor",
    "PaginationParams",
    "ListPage",
    "LogEntry",
    "DebugLogger",
    "ResourceCache",
    "SubscriberFilters",
    "SubscriptionFilters",
    "GrowthStatsRange",
    "build_headers",
    "build_authorize_url",
    "classify_error",
    "iterate_pages",
    "iterate_items",
    "ConvertKitError",
    "ConfigurationError",
    "InvalidArgumentError",
    "APIError",
    "ClientError",
    "ServerError",
    "TransportError",
    "MalformedResponseError",
]
