"""Tests for the action descriptor builder and metadata validation."""

from __future__ import annotations

import copy

import pytest

from epigraph.errors import MetadataValidationError
from epigraph.settings import Settings
from epigraph.spec.metadata import ACTION_PATH, build_descriptor, describe, validate_metadata
from epigraph.spec.models import ActionDescriptor

BASE_URL = "https://actions.example.com"


@pytest.fixture()
def payload(settings: Settings) -> dict:
    return build_descriptor(BASE_URL, settings).to_dict()


class TestDescribe:
    def test_single_action_single_required_message_param(self, settings: Settings) -> None:
        descriptor = describe(BASE_URL, settings)

        assert isinstance(descriptor, ActionDescriptor)
        assert len(descriptor.actions) == 1
        action = descriptor.actions[0]
        assert action.kind == "dynamic"
        assert len(action.params) == 1
        param = action.params[0]
        assert param.name == "message"
        assert param.value_type == "text"
        assert param.required is True
        assert param.label == "Your Message"

    def test_path_is_served_route(self, settings: Settings) -> None:
        descriptor = describe(BASE_URL, settings)
        assert descriptor.actions[0].path == ACTION_PATH
        assert descriptor.url == BASE_URL + ACTION_PATH
        assert descriptor.base_url == BASE_URL

    def test_trailing_slash_in_base_url(self, settings: Settings) -> None:
        descriptor = describe(BASE_URL + "/", settings)
        assert descriptor.url == BASE_URL + ACTION_PATH
        assert descriptor.base_url == BASE_URL

    def test_source_chain_follows_settings(self) -> None:
        descriptor = describe(BASE_URL, Settings(chain="sepolia"))
        assert descriptor.actions[0].source_chain == "sepolia"

    def test_wire_form(self, settings: Settings) -> None:
        wire = describe(BASE_URL, settings).to_dict()
        assert set(wire) == {"url", "icon", "title", "baseUrl", "description", "actions"}
        action = wire["actions"][0]
        assert action["type"] == "dynamic"
        assert action["chains"] == {"source": "fuji"}
        assert action["params"][0]["type"] == "text"
        assert action["params"][0]["required"] is True

    def test_pure(self, settings: Settings) -> None:
        assert describe(BASE_URL, settings) == describe(BASE_URL, settings)

    def test_rejects_relative_base_url(self, settings: Settings) -> None:
        with pytest.raises(MetadataValidationError) as exc_info:
            describe("not-a-url", settings)
        assert exc_info.value.field in {"url", "baseUrl"}

    def test_rejects_non_http_base_url(self, settings: Settings) -> None:
        with pytest.raises(MetadataValidationError) as exc_info:
            describe("ftp://files.example.com", settings)
        assert exc_info.value.field in {"url", "baseUrl"}


class TestValidateMetadata:
    def test_valid_payload_round_trips(self, payload: dict) -> None:
        descriptor = validate_metadata(payload)
        assert descriptor.to_dict() == payload

    def test_empty_actions(self, payload: dict) -> None:
        payload["actions"] = []
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions"

    def test_missing_title(self, payload: dict) -> None:
        del payload["title"]
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "<root>"

    def test_absolute_path_rejected(self, payload: dict) -> None:
        payload["actions"][0]["path"] = "https://elsewhere.example.com/api"
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions/0/path"

    def test_empty_path_rejected(self, payload: dict) -> None:
        payload["actions"][0]["path"] = ""
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions/0/path"

    def test_duplicate_param_names(self, payload: dict) -> None:
        params = payload["actions"][0]["params"]
        params.append(copy.deepcopy(params[0]))
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions/0/params/1/name"
        assert "duplicate" in str(exc_info.value)

    def test_unknown_action_type(self, payload: dict) -> None:
        payload["actions"][0]["type"] = "static"
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions/0/type"

    def test_relative_url_rejected(self, payload: dict) -> None:
        payload["url"] = "/api/store-message"
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "url"

    def test_first_failing_field_reported(self, payload: dict) -> None:
        payload["actions"][0]["path"] = ""
        payload["title"] = ""
        with pytest.raises(MetadataValidationError) as exc_info:
            validate_metadata(payload)
        assert exc_info.value.field == "actions/0/path"
        assert len(exc_info.value.errors) == 2
