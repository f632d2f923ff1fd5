"""Unit tests for endpoint descriptions."""

from urllib.parse import parse_qs, urlsplit

import pytest

from . import endpoints
from .endpoints import Endpoint, Paged, encode_params
from .entities import Account, Relationship, Status


def describe_encode_params():
    def it_drops_none_values():
        assert encode_params({"a": None, "b": "1"}) == [("b", "1")]

    def it_encodes_booleans_as_lowercase():
        assert encode_params({"local": True, "pinned": False}) == [("local", "true"), ("pinned", "false")]

    def it_repeats_sequences_with_array_suffix():
        assert encode_params({"exclude_types": ["follow", "mention"]}) == [
            ("exclude_types[]", "follow"),
            ("exclude_types[]", "mention"),
        ]

    def it_stringifies_numbers():
        assert encode_params({"limit": 20}) == [("limit", "20")]


def describe_Paged():
    @pytest.fixture
    def endpoint():
        return Endpoint("GET", "/api/v1/timelines/public", list[Status], params={"local": True})

    def it_adds_only_supplied_cursors(endpoint):
        paged = Paged(endpoint, max_id="10")
        assert paged.query_params() == [("local", "true"), ("max_id", "10")]

    def it_adds_limit(endpoint):
        paged = Paged(endpoint, min_id="3", limit=40)
        assert paged.query_params() == [("local", "true"), ("min_id", "3"), ("limit", "40")]

    def it_does_not_mutate_the_wrapped_endpoint(endpoint):
        Paged(endpoint, max_id="1", min_id="2", since_id="3", limit=4).query_params()
        assert endpoint.query_params() == [("local", "true")]
        assert dict(endpoint.params) == {"local": True}

    def it_exposes_the_wrapped_endpoint(endpoint):
        paged = Paged(endpoint)
        assert paged.method == "GET"
        assert paged.path == "/api/v1/timelines/public"
        assert paged.result_type == list[Status]
        assert paged.body is None
        assert paged.query_params() == endpoint.query_params()


def describe_constructors():
    def it_builds_verify_credentials():
        e = endpoints.verify_credentials()
        assert (e.method, e.path, e.result_type) == ("GET", "/api/v1/accounts/verify_credentials", Account)

    def it_builds_local_and_federated_timelines():
        assert endpoints.public_timeline(local=True).query_params() == [("local", "true")]
        assert endpoints.public_timeline().query_params() == []

    def it_strips_hash_from_tags():
        assert endpoints.tag_timeline("#python").path == "/api/v1/timelines/tag/python"

    def it_escapes_reserved_characters_in_tags():
        assert endpoints.tag_timeline("c#?x").path == "/api/v1/timelines/tag/c%23%3Fx"
        assert endpoints.tag_timeline("#a/b").path == "/api/v1/timelines/tag/a%2Fb"

    def it_escapes_ids_in_paths():
        assert endpoints.status("1/../2").path == "/api/v1/statuses/1%2F..%2F2"
        assert endpoints.account("a?b").path == "/api/v1/accounts/a%3Fb"
        assert endpoints.account_statuses("a#b").path == "/api/v1/accounts/a%23b/statuses"
        assert endpoints.list_timeline("4 2").path == "/api/v1/timelines/list/4%202"

    def it_builds_list_timeline():
        assert endpoints.list_timeline("42").path == "/api/v1/timelines/list/42"

    def it_builds_relationships_with_repeated_ids():
        e = endpoints.relationships(["1", "2"])
        assert e.path == "/api/v1/accounts/relationships"
        assert e.result_type == list[Relationship]
        assert e.query_params() == [("id[]", "1"), ("id[]", "2")]

    def it_builds_create_app_body():
        e = endpoints.create_app("Client", scopes=("read", "write"), website="https://example.com")
        assert e.method == "POST"
        assert e.body == {
            "client_name": "Client",
            "redirect_uris": endpoints.OOB_REDIRECT_URI,
            "scopes": "read write",
            "website": "https://example.com",
        }

    def it_builds_oauth_token_body():
        e = endpoints.oauth_token("id", "secret", "code123")
        assert e.path == "/oauth/token"
        assert e.body["grant_type"] == "authorization_code"
        assert e.body["code"] == "code123"


def describe_authorize_url():
    def it_builds_authorization_code_url():
        url = endpoints.authorize_url("https://mastodon.example/", "cid", scopes=("read",))
        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://mastodon.example/oauth/authorize"
        assert parse_qs(parts.query) == {
            "client_id": ["cid"],
            "redirect_uri": [endpoints.OOB_REDIRECT_URI],
            "response_type": ["code"],
            "scope": ["read"],
        }
