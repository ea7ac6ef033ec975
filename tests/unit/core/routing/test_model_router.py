import pytest
from dialect_adapter.core.common.exceptions import (
    InvalidMappingError,
    ModelNotFoundError,
)
from dialect_adapter.core.domain.api_type import ApiType
from dialect_adapter.core.routing.model_router import ModelRouter


class TestModelRouter:
    def test_resolve_returns_configured_dialect(self, router: ModelRouter) -> None:
        assert router.resolve("gpt-4o") is ApiType.CHAT_COMPLETIONS
        assert router.resolve("o3-pro") is ApiType.RESPONSE

    def test_resolve_unknown_model_raises(self, router: ModelRouter) -> None:
        with pytest.raises(ModelNotFoundError) as exc_info:
            router.resolve("missing-model")

        assert exc_info.value.model == "missing-model"
        assert exc_info.value.status_code == 404
        assert exc_info.value.details["model"] == "missing-model"

    def test_resolve_is_case_sensitive(self, router: ModelRouter) -> None:
        with pytest.raises(ModelNotFoundError):
            router.resolve("GPT-4O")

    def test_contains_never_raises(self, router: ModelRouter) -> None:
        assert router.contains("gpt-4o")
        assert not router.contains("missing-model")
        assert not router.contains(None)  # type: ignore[arg-type]

    def test_list_models_keeps_configuration_order(self) -> None:
        router = ModelRouter(
            {
                "zeta": ApiType.RESPONSE,
                "alpha": ApiType.CHAT_COMPLETIONS,
                "mid": ApiType.RESPONSE,
            }
        )

        assert router.list_models() == ["zeta", "alpha", "mid"]

    def test_router_does_not_follow_source_mapping_changes(self) -> None:
        mapping = {"gpt-4o": ApiType.CHAT_COMPLETIONS}
        router = ModelRouter(mapping)

        mapping["o3-pro"] = ApiType.RESPONSE

        assert not router.contains("o3-pro")
        assert len(router) == 1

    def test_rejects_values_that_are_not_api_types(self) -> None:
        with pytest.raises(InvalidMappingError) as exc_info:
            ModelRouter({"gpt-4": "respond", "gpt-3.5": "chat"})  # type: ignore[dict-item]

        assert exc_info.value.details["invalid_models"] == ["gpt-4", "gpt-3.5"]

    def test_rejects_empty_model_names(self) -> None:
        with pytest.raises(InvalidMappingError):
            ModelRouter({"": ApiType.RESPONSE})
