"""MessageBus worker: feeds platform messages to the command runner."""

import asyncio
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from syntaxbot.messagebus.base import BusChannel, MessageBus
from syntaxbot.server.base import Worker

if TYPE_CHECKING:
    from syntaxbot.core.context import SharedContext


class MessageBusWorker(Worker):
    """Runs every configured bus and dispatches each message as a command."""

    def __init__(self, context: "SharedContext"):
        super().__init__(context)
        self.buses = context.messagebus_buses
        self.runner = context.runner

    async def run(self) -> None:
        """Start all buses and process incoming messages."""
        self.logger.info(f"MessageBusWorker started with {len(self.buses)} bus(es)")

        bus_tasks = [bus.run(self._create_callback(bus)) for bus in self.buses]

        try:
            await asyncio.gather(*bus_tasks)
        except asyncio.CancelledError:
            await asyncio.gather(*[bus.stop() for bus in self.buses])
            raise

    def _create_callback(
        self, bus: MessageBus[Any]
    ) -> Callable[[str, Any], Awaitable[None]]:
        """Create the message callback for one bus."""

        async def callback(message: str, context: Any) -> None:
            if not bus.is_allowed(context):
                self.logger.debug(
                    f"Ignored non-whitelisted message from {bus.platform_name}"
                )
                return

            try:
                handled = await self.runner.run_message(
                    message, BusChannel(bus, context), context
                )
            except Exception as e:
                self.logger.error(
                    f"Error processing message from {bus.platform_name}: {e}"
                )
                return

            if handled:
                self.logger.debug(f"Dispatched command from {bus.platform_name}")

        return callback
