"""Tests for SharedContext."""

import sys
import types

from syntaxbot.core.commands.handlers import HandlerRegistry
from syntaxbot.core.commands.registry import CommandManager
from syntaxbot.core.commands.runner import CommandRunner
from syntaxbot.core.context import SharedContext


def test_context_wires_manager_and_runner(test_context, test_config, handlers):
    assert isinstance(test_context.command_manager, CommandManager)
    assert isinstance(test_context.runner, CommandRunner)
    assert test_context.runner.manager is test_context.command_manager
    assert test_context.command_manager.handlers is handlers
    assert test_context.command_manager.commands_path == test_config.commands_path
    assert test_context.messagebus_buses == []


def test_context_loads_handler_modules(test_config, monkeypatch):
    module = types.ModuleType("ctx_handlers")
    module.handlers = HandlerRegistry()
    module.handlers.register("ping", lambda values, channel: "pong")
    monkeypatch.setitem(sys.modules, "ctx_handlers", module)
    test_config.handler_modules = ["ctx_handlers"]

    context = SharedContext(test_config, buses=[])

    assert "ping" in context.handlers
