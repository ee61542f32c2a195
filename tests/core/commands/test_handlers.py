"""Tests for handler registration and the handler contract."""

import sys
import types

import pytest

from syntaxbot.core.commands.handlers import HandlerRegistry, check_handler_contract
from syntaxbot.core.exceptions import HandlerContractError, ManagerBuildError


class CoinCommands:
    def give(self, values, channel):
        return "gave"

    async def take(self, values, channel):
        return "took"

    def _helper(self):
        pass


class TestCheckHandlerContract:
    def test_two_positional_parameters(self):
        check_handler_contract(lambda values, channel: None)

    def test_bound_method(self):
        check_handler_contract(CoinCommands().give)

    def test_async_function(self):
        async def handler(values, channel):
            pass

        check_handler_contract(handler)

    @pytest.mark.parametrize(
        "handler",
        [
            lambda values: None,
            lambda values, channel, extra: None,
            lambda: None,
        ],
    )
    def test_wrong_shape(self, handler):
        with pytest.raises(HandlerContractError):
            check_handler_contract(handler)

    def test_not_callable(self):
        with pytest.raises(HandlerContractError, match="not callable"):
            check_handler_contract("give")


class TestHandlerRegistry:
    def test_register_and_get_ignore_case(self):
        registry = HandlerRegistry()
        handler = lambda values, channel: None  # noqa: E731
        registry.register("Give", handler)
        assert registry.get("GIVE") is handler
        assert "give" in registry
        assert len(registry) == 1

    def test_decorator(self):
        registry = HandlerRegistry()

        @registry.handler("roll")
        def roll(values, channel):
            return "rolled"

        assert registry.get("roll") is roll

    def test_duplicate_name(self):
        registry = HandlerRegistry()
        registry.register("give", lambda values, channel: None)
        with pytest.raises(ManagerBuildError, match="give"):
            registry.register("GIVE", lambda values, channel: None)

    def test_register_object_uses_public_methods(self):
        registry = HandlerRegistry()
        registry.register_object(CoinCommands())
        assert sorted(name for name, _ in registry.items()) == ["give", "take"]
        assert registry.get("_helper") is None

    def test_missing_handler(self):
        assert HandlerRegistry().get("nothing") is None

    def test_load_modules(self, monkeypatch):
        module = types.ModuleType("fake_handlers")
        module.handlers = HandlerRegistry()
        module.handlers.register("ping", lambda values, channel: "pong")
        monkeypatch.setitem(sys.modules, "fake_handlers", module)

        registry = HandlerRegistry()
        registry.load_modules(["fake_handlers"])
        assert "ping" in registry

    def test_load_module_without_registry(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "empty_handlers", types.ModuleType("x"))
        with pytest.raises(ManagerBuildError, match="no HandlerRegistry"):
            HandlerRegistry().load_modules(["empty_handlers"])

    def test_load_missing_module(self):
        with pytest.raises(ManagerBuildError, match="Cannot import"):
            HandlerRegistry().load_modules(["syntaxbot_no_such_module"])
