"""Client for the Mastodon REST API.

Sends one request per call, decodes JSON bodies into typed entities and
recovers max_id/min_id/since_id pagination cursors from Link headers.
"""

from .cli import main
from .client import AsyncMastodonAPIClient, MastodonAPIClient, get_client
from .endpoints import Endpoint, Paged
from .errors import APIError, InvalidInstanceURL
from .models import PageInfo, PagedResult
from .pagination import parse_link_header

__all__ = [
    "main",
    "get_client",
    "MastodonAPIClient",
    "AsyncMastodonAPIClient",
    "Endpoint",
    "Paged",
    "APIError",
    "InvalidInstanceURL",
    "PageInfo",
    "PagedResult",
    "parse_link_header",
]

if __name__ == "__main__":
    main()
