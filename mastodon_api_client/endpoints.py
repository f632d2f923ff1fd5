"""Endpoint descriptions for the Mastodon REST API.

An ``Endpoint`` is an immutable value naming one API call: method, path,
query parameters, JSON body and the type the response body decodes to. The
client turns it into an ``httpx.Request``; nothing here does I/O.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

from .entities import (
    AccessToken,
    Account,
    Application,
    Emoji,
    Filter,
    Instance,
    MastodonList,
    Notification,
    Preferences,
    Relationship,
    Status,
)

DEFAULT_SCOPES = ("read", "write", "follow", "push")
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"


def encode_params(params: Mapping[str, Any]) -> list[tuple[str, str]]:
    """Flatten endpoint parameters into query pairs.

    None values are dropped, booleans become "true"/"false" and sequences
    are repeated under "name[]".
    """
    pairs = []
    for name, value in params.items():
        if value is None:
            continue
        if isinstance(value, Sequence) and not isinstance(value, str):
            pairs.extend((f"{name}[]", _encode_value(v)) for v in value)
        else:
            pairs.append((name, _encode_value(value)))
    return pairs


def _segment(value: Any) -> str:
    """Percent-encode one path segment, including "/", "?" and "#"."""
    return quote(str(value), safe="")


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class Endpoint:
    method: str
    path: str
    result_type: Any
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] | None = None

    def query_params(self) -> list[tuple[str, str]]:
        return encode_params(self.params)


@dataclass(frozen=True)
class Paged:
    """An endpoint with pagination parameters added to its query."""

    endpoint: Endpoint
    max_id: str | None = None
    min_id: str | None = None
    since_id: str | None = None
    limit: int | None = None

    @property
    def method(self) -> str:
        return self.endpoint.method

    @property
    def path(self) -> str:
        return self.endpoint.path

    @property
    def result_type(self) -> Any:
        return self.endpoint.result_type

    @property
    def body(self) -> Mapping[str, Any] | None:
        return self.endpoint.body

    def query_params(self) -> list[tuple[str, str]]:
        paging = {
            "max_id": self.max_id,
            "min_id": self.min_id,
            "since_id": self.since_id,
            "limit": self.limit,
        }
        return self.endpoint.query_params() + encode_params(paging)


# Accounts


def verify_credentials() -> Endpoint:
    return Endpoint("GET", "/api/v1/accounts/verify_credentials", Account)


def account(account_id: str) -> Endpoint:
    return Endpoint("GET", f"/api/v1/accounts/{_segment(account_id)}", Account)


def account_statuses(
    account_id: str,
    exclude_replies: bool | None = None,
    only_media: bool | None = None,
    pinned: bool | None = None,
) -> Endpoint:
    return Endpoint(
        "GET",
        f"/api/v1/accounts/{_segment(account_id)}/statuses",
        list[Status],
        params={"exclude_replies": exclude_replies, "only_media": only_media, "pinned": pinned},
    )


def relationships(account_ids: Sequence[str]) -> Endpoint:
    return Endpoint(
        "GET",
        "/api/v1/accounts/relationships",
        list[Relationship],
        params={"id": list(account_ids)},
    )


def preferences() -> Endpoint:
    return Endpoint("GET", "/api/v1/preferences", Preferences)


# Instance


def instance() -> Endpoint:
    return Endpoint("GET", "/api/v1/instance", Instance)


def custom_emojis() -> Endpoint:
    return Endpoint("GET", "/api/v1/custom_emojis", list[Emoji])


# Lists and filters


def lists() -> Endpoint:
    return Endpoint("GET", "/api/v1/lists", list[MastodonList])


def filters() -> Endpoint:
    return Endpoint("GET", "/api/v1/filters", list[Filter])


# Timelines


def home_timeline() -> Endpoint:
    return Endpoint("GET", "/api/v1/timelines/home", list[Status])


def public_timeline(local: bool = False, only_media: bool | None = None) -> Endpoint:
    return Endpoint(
        "GET",
        "/api/v1/timelines/public",
        list[Status],
        params={"local": local or None, "only_media": only_media},
    )


def tag_timeline(tag: str, local: bool = False) -> Endpoint:
    return Endpoint(
        "GET",
        f"/api/v1/timelines/tag/{_segment(tag.lstrip('#'))}",
        list[Status],
        params={"local": local or None},
    )


def list_timeline(list_id: str) -> Endpoint:
    return Endpoint("GET", f"/api/v1/timelines/list/{_segment(list_id)}", list[Status])


# Statuses and notifications


def status(status_id: str) -> Endpoint:
    return Endpoint("GET", f"/api/v1/statuses/{_segment(status_id)}", Status)


def notifications(exclude_types: Sequence[str] | None = None) -> Endpoint:
    return Endpoint(
        "GET",
        "/api/v1/notifications",
        list[Notification],
        params={"exclude_types": exclude_types},
    )


# OAuth


def create_app(
    client_name: str,
    redirect_uri: str = OOB_REDIRECT_URI,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    website: str | None = None,
) -> Endpoint:
    body = {
        "client_name": client_name,
        "redirect_uris": redirect_uri,
        "scopes": " ".join(scopes),
    }
    if website:
        body["website"] = website
    return Endpoint("POST", "/api/v1/apps", Application, body=body)


def oauth_token(
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str = OOB_REDIRECT_URI,
    scopes: Sequence[str] = DEFAULT_SCOPES,
) -> Endpoint:
    body = {
        "grant_type": "authorization_code",
        "client_id": client_id,
        "client_secret": client_secret,
        "code": code,
        "redirect_uri": redirect_uri,
        "scope": " ".join(scopes),
    }
    return Endpoint("POST", "/oauth/token", AccessToken, body=body)


def authorize_url(
    instance_url: str,
    client_id: str,
    redirect_uri: str = OOB_REDIRECT_URI,
    scopes: Sequence[str] = DEFAULT_SCOPES,
) -> str:
    """URL to send the user's browser to for the authorization-code step."""
    query = urlencode({
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(scopes),
    })
    return f"{instance_url.rstrip('/')}/oauth/authorize?{query}"
