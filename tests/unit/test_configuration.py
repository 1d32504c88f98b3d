"""Tests for configuration merging."""

import dataclasses
import logging

import pytest

from contentful_management import DEFAULT_CONFIGURATION, Configuration
from contentful_management.transport import ProxyParameters

OVERRIDES = {
    "api_url": "local.test",
    "api_version": "2",
    "secure": False,
    "default_locale": "de-DE",
    "gzip_encoded": True,
    "logger": logging.getLogger("tests.config"),
    "log_level": logging.DEBUG,
    "raise_errors": True,
    "dynamic_entries": ("space1",),
    "proxy_host": "proxy.local",
    "proxy_port": 3128,
    "proxy_username": "user",
    "proxy_password": "secret",
    "timeout": 5.0,
    "max_rate_limit_retries": 2,
    "max_rate_limit_wait": 10.0,
}


class TestMerge:
    @pytest.mark.unit
    def test_empty_merge_equals_defaults(self):
        assert Configuration.merge({}) == DEFAULT_CONFIGURATION
        assert Configuration.merge() == DEFAULT_CONFIGURATION

    @pytest.mark.unit
    def test_documented_defaults(self):
        config = Configuration.merge()

        assert config.api_url == "api.contentful.com"
        assert config.api_version == "1"
        assert config.secure is True
        assert config.default_locale == "en-US"
        assert config.gzip_encoded is False
        assert config.logger is None
        assert config.log_level == logging.INFO
        assert config.raise_errors is False
        assert config.dynamic_entries == ()
        assert config.proxy == ProxyParameters()

    @pytest.mark.unit
    def test_covers_every_option(self):
        assert set(OVERRIDES) == Configuration.option_names()

    @pytest.mark.unit
    @pytest.mark.parametrize("key", sorted(OVERRIDES))
    def test_single_override(self, key):
        config = Configuration.merge({key: OVERRIDES[key]})

        assert getattr(config, key) == OVERRIDES[key]
        for other in Configuration.option_names() - {key}:
            assert getattr(config, other) == getattr(DEFAULT_CONFIGURATION, other)

    @pytest.mark.unit
    def test_unknown_keys_are_ignored(self):
        config = Configuration.merge({"api_url": "local.test", "no_such_option": 1})

        assert config.api_url == "local.test"
        assert not hasattr(config, "no_such_option")

    @pytest.mark.unit
    def test_keyword_overrides_win(self):
        config = Configuration.merge({"api_version": "1"}, api_version="3")
        assert config.api_version == "3"

    @pytest.mark.unit
    def test_dynamic_entries_list_becomes_tuple(self):
        spaces = ["space1", "space2"]
        config = Configuration.merge(dynamic_entries=spaces)

        spaces.append("space3")
        assert config.dynamic_entries == ("space1", "space2")

    @pytest.mark.unit
    def test_single_space_id_is_not_split(self):
        config = Configuration.merge(dynamic_entries="space1")
        assert config.dynamic_entries == ("space1",)

    @pytest.mark.unit
    def test_false_logger_means_no_logger(self):
        assert Configuration.merge(logger=False).logger is None

    @pytest.mark.unit
    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIGURATION.api_url = "other"

    @pytest.mark.unit
    def test_to_dict_round_trips(self):
        config = Configuration.merge(OVERRIDES)
        assert Configuration.merge(config.to_dict()) == config


class TestDerived:
    @pytest.mark.unit
    def test_base_url(self):
        assert DEFAULT_CONFIGURATION.base_url == "https://api.contentful.com/spaces"
        assert Configuration.merge(secure=False, api_url="local.test").base_url == "http://local.test/spaces"

    @pytest.mark.unit
    def test_proxy(self):
        config = Configuration.merge(proxy_host="proxy.local", proxy_port=3128)
        assert config.proxy == ProxyParameters(host="proxy.local", port=3128)
