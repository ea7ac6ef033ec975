import json
from pathlib import Path

import pytest
from dialect_adapter.core.common.exceptions import InvalidMappingError
from dialect_adapter.core.config.app_config import AdapterConfig
from dialect_adapter.core.config.model_mapping import (
    build_model_router,
    load_model_mapping,
    load_model_mapping_file,
    validate_model_mapping,
)
from dialect_adapter.core.domain.api_type import ApiType


class TestValidateModelMapping:
    def test_valid_mapping(self) -> None:
        mapping = validate_model_mapping(
            {"gpt-4o": "chat_completions", "o3-pro": "response"}
        )

        assert mapping == {
            "gpt-4o": ApiType.CHAT_COMPLETIONS,
            "o3-pro": ApiType.RESPONSE,
        }
        assert list(mapping) == ["gpt-4o", "o3-pro"]

    def test_every_invalid_entry_is_listed(self) -> None:
        with pytest.raises(InvalidMappingError) as exc_info:
            validate_model_mapping({"gpt-4": "respond", "gpt-3.5": "chat"})

        error = exc_info.value
        assert error.details["invalid_models"] == ["gpt-4", "gpt-3.5"]
        assert 'Model "gpt-4"' in error.message
        assert 'Model "gpt-3.5"' in error.message
        assert error.status_code == 500

    def test_only_invalid_entries_are_listed(self) -> None:
        with pytest.raises(InvalidMappingError) as exc_info:
            validate_model_mapping(
                {"ok": "response", "bad": 3, "also-ok": "chat_completions"}
            )

        assert exc_info.value.details["invalid_models"] == ["bad"]

    def test_empty_model_name_is_rejected(self) -> None:
        with pytest.raises(InvalidMappingError) as exc_info:
            validate_model_mapping({"": "response"})

        assert exc_info.value.details["invalid_models"] == [""]

    @pytest.mark.parametrize("raw", [[], "response", None, 42])
    def test_mapping_must_be_object(self, raw: object) -> None:
        with pytest.raises(InvalidMappingError, match="must be an object"):
            validate_model_mapping(raw)


class TestLoadModelMappingFile:
    def test_load_json(self, mapping_file: Path) -> None:
        assert load_model_mapping_file(mapping_file) == {
            "gpt-4o": "chat_completions",
            "o3-pro": "response",
        }

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yaml"
        path.write_text("gpt-4o: chat_completions\no3-pro: response\n")

        assert load_model_mapping(path) == {
            "gpt-4o": ApiType.CHAT_COMPLETIONS,
            "o3-pro": ApiType.RESPONSE,
        }

    def test_duplicate_json_keys_are_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "models.json"
        path.write_text('{"gpt-4o": "response", "gpt-4o": "chat_completions"}')

        with pytest.raises(InvalidMappingError, match="Duplicate model name") as exc_info:
            load_model_mapping_file(path)

        assert exc_info.value.details["model"] == "gpt-4o"

    def test_duplicate_yaml_keys_are_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yml"
        path.write_text("gpt-4o: response\ngpt-4o: chat_completions\n")

        with pytest.raises(InvalidMappingError, match="Duplicate model name"):
            load_model_mapping_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidMappingError, match="not found"):
            load_model_mapping_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "models.json"
        path.write_text('{"gpt-4o": ')

        with pytest.raises(InvalidMappingError, match="Invalid JSON"):
            load_model_mapping_file(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yaml"
        path.write_text("gpt-4o: [unclosed\n")

        with pytest.raises(InvalidMappingError, match="Invalid YAML"):
            load_model_mapping_file(path)


def test_build_model_router(mapping_file: Path) -> None:
    config = AdapterConfig(model_mapping_file=mapping_file)

    router = build_model_router(config)

    assert router.list_models() == ["gpt-4o", "o3-pro"]
    assert router.resolve("o3-pro") is ApiType.RESPONSE


def test_build_model_router_fails_on_invalid_mapping(tmp_path: Path) -> None:
    path = tmp_path / "models.json"
    path.write_text(json.dumps({"gpt-4": "respond", "gpt-3.5": "chat"}))

    with pytest.raises(InvalidMappingError) as exc_info:
        build_model_router(AdapterConfig(model_mapping_file=path))

    assert exc_info.value.details["invalid_models"] == ["gpt-4", "gpt-3.5"]
