"""Configuration: the Pydantic schema wall and context-scoped resolution."""

from __future__ import annotations

import asyncio
import dataclasses

import pytest

from resultflow import ConfigurationError, FrozenConfig, config_scope, current_config, resolve_config
from resultflow.config import Settings

pytestmark = pytest.mark.unit


class TestResolveConfig:
    def test_defaults(self):
        config = resolve_config()

        assert config == FrozenConfig(
            predicate_message="Predicate returned false!",
            aggregate_message="One or more results failed",
            log_captured_errors=False,
        )

    def test_keyword_overrides_win_over_mapping(self):
        config = resolve_config({"predicate_message": "a"}, predicate_message="b")
        assert config.predicate_message == "b"

    def test_messages_are_trimmed(self):
        assert resolve_config(aggregate_message="  padded  ").aggregate_message == "padded"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"predicate_message": ""},
            {"aggregate_message": "   "},
            {"log_captured_errors": "sometimes"},
            {"unknown_field": 1},
        ],
    )
    def test_invalid_values_raise_configuration_error(self, overrides):
        with pytest.raises(ConfigurationError) as exc:
            resolve_config(overrides)

        assert exc.value.hint is not None
        assert "predicate_message" in exc.value.hint

    def test_frozen_config_is_immutable(self):
        config = resolve_config()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.predicate_message = "changed"  # type: ignore[misc]

    def test_settings_schema_matches_frozen_config(self):
        assert set(Settings.model_fields) == {f.name for f in dataclasses.fields(FrozenConfig)}


class TestConfigScope:
    def test_tests_start_without_an_active_scope(self):
        assert current_config() == resolve_config()

    def test_scope_applies_and_restores(self):
        before = current_config()

        with config_scope(predicate_message="inner") as scoped:
            assert current_config() is scoped
            assert scoped.predicate_message == "inner"

        assert current_config() == before

    def test_scopes_nest_and_layer_overrides(self):
        with config_scope(predicate_message="outer"):
            with config_scope(aggregate_message="inner") as inner:
                assert inner.predicate_message == "outer"
                assert inner.aggregate_message == "inner"
            assert current_config().aggregate_message == "One or more results failed"

    def test_scope_accepts_frozen_config(self):
        config = resolve_config(log_captured_errors=True)

        with config_scope(config):
            assert current_config() is config

    def test_scope_rejects_config_plus_overrides(self):
        with pytest.raises(ConfigurationError):
            with config_scope(resolve_config(), predicate_message="x"):
                pass

    def test_scope_is_restored_after_errors(self):
        with pytest.raises(RuntimeError):
            with config_scope(predicate_message="temporary"):
                raise RuntimeError("boom")

        assert current_config().predicate_message == "Predicate returned false!"

    @pytest.mark.asyncio
    async def test_scopes_are_isolated_between_tasks(self):
        seen: dict[str, str] = {}

        async def worker(name: str) -> None:
            with config_scope(predicate_message=name):
                await asyncio.sleep(0)
                seen[name] = current_config().predicate_message

        await asyncio.gather(worker("first"), worker("second"))

        assert seen == {"first": "first", "second": "second"}
