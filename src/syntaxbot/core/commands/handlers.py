"""Registration of developer code that runs when a function command resolves."""

import importlib
import inspect
import logging
from collections.abc import Iterable
from typing import Any, Callable

from syntaxbot.core.commands.base import Handler
from syntaxbot.core.exceptions import HandlerContractError, ManagerBuildError

logger = logging.getLogger(__name__)


def check_handler_contract(handler: Handler) -> None:
    """
    Make sure a handler can be called as handler(values, channel).

    Raises:
        HandlerContractError: If the handler cannot take exactly those two
            positional arguments
    """
    name = getattr(handler, "__name__", repr(handler))
    if not callable(handler):
        raise HandlerContractError(f"Handler '{name}' is not callable")
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError) as e:
        raise HandlerContractError(f"Cannot inspect handler '{name}': {e}") from e
    try:
        signature.bind(object(), object())
    except TypeError as e:
        raise HandlerContractError(
            f"Handler '{name}' must accept (values, channel), got {signature}"
        ) from e


class HandlerRegistry:
    """Maps lowercase command names to the handlers that implement them."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, name: str, handler: Handler) -> None:
        """
        Register a handler for a command name.

        Raises:
            ManagerBuildError: If a handler is already registered for the name
        """
        key = name.lower()
        if key in self._handlers:
            raise ManagerBuildError(f"More than one command handler named '{key}'")
        self._handlers[key] = handler

    def handler(self, name: str) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""

        def decorator(fn: Handler) -> Handler:
            self.register(name, fn)
            return fn

        return decorator

    def register_object(self, obj: Any) -> None:
        """
        Register every public method of an object, keyed by method name.

        Raises:
            ManagerBuildError: If two handlers end up with the same name
        """
        for attr_name, member in inspect.getmembers(obj, callable):
            if attr_name.startswith("_") or inspect.isclass(member):
                continue
            self.register(attr_name, member)

    def update(self, other: "HandlerRegistry") -> None:
        for name, handler in other.items():
            self.register(name, handler)

    def load_modules(self, module_names: Iterable[str]) -> None:
        """
        Import modules and merge the HandlerRegistry each exposes as `handlers`.

        Raises:
            ManagerBuildError: If a module cannot be imported or has no registry
        """
        for module_name in module_names:
            try:
                module = importlib.import_module(module_name)
            except ImportError as e:
                raise ManagerBuildError(
                    f"Cannot import handler module '{module_name}': {e}"
                ) from e
            registry = getattr(module, "handlers", None)
            if not isinstance(registry, HandlerRegistry):
                raise ManagerBuildError(
                    f"Handler module '{module_name}' has no HandlerRegistry named 'handlers'"
                )
            self.update(registry)
            logger.info(f"Loaded {len(registry)} handler(s) from {module_name}")

    def get(self, name: str) -> Handler | None:
        return self._handlers.get(name.lower())

    def items(self) -> list[tuple[str, Handler]]:
        return list(self._handlers.items())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
