"""Unit tests for settings."""

from unittest.mock import patch

import pytest

from .errors import InvalidInstanceURL
from .settings import Settings, normalize_instance_url


def describe_normalize_instance_url():
    def it_adds_https_scheme():
        assert normalize_instance_url("mastodon.social") == "https://mastodon.social"

    def it_strips_whitespace_and_trailing_slash():
        assert normalize_instance_url("  https://mastodon.social/ ") == "https://mastodon.social"

    def it_keeps_http_and_ports():
        assert normalize_instance_url("http://localhost:3000") == "http://localhost:3000"

    def it_rejects_empty_input():
        with pytest.raises(InvalidInstanceURL):
            normalize_instance_url("   ")

    def it_rejects_other_schemes():
        with pytest.raises(InvalidInstanceURL):
            normalize_instance_url("ftp://mastodon.social")

    def it_is_a_value_error():
        assert issubclass(InvalidInstanceURL, ValueError)


def describe_Settings():
    def it_reads_environment():
        env = {
            "MASTODON_INSTANCE_URL": "https://mastodon.example",
            "MASTODON_ACCESS_TOKEN": "tok",
            "MASTODON_TIMEOUT": "5",
        }
        with patch.dict("os.environ", env, clear=True):
            settings = Settings(_env_file=None)
        assert settings.mastodon_instance_url == "https://mastodon.example"
        assert settings.mastodon_access_token == "tok"
        assert settings.mastodon_timeout == 5.0

    def it_defaults_to_no_instance():
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.mastodon_instance_url is None
        assert settings.mastodon_access_token is None
