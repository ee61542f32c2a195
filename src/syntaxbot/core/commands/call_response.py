"""Call-response commands: canned replies chosen by the text after the name."""

from collections.abc import Sequence
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from syntaxbot.core.commands.base import Channel, Command, Handler
from syntaxbot.core.commands.help import render_info
from syntaxbot.utils.text import merge_list


class Response(BaseModel):
    """One canned reply and the keys that select it."""

    model_config = ConfigDict(frozen=True)

    keys: tuple[str, ...] = ()
    type: Literal["text"] = "text"
    contents: str

    @property
    def main_key(self) -> str:
        return self.keys[0] if self.keys else ""

    def matches(self, key: str) -> bool:
        """A response without keys matches anything."""
        if not self.keys:
            return True
        return any(candidate.lower() == key.lower() for candidate in self.keys)


class CallResponse(Command):
    """A command that replies with fixed text and takes no typed arguments."""

    type_tag: ClassVar[str] = "callresponse"

    responses: tuple[Response, ...] = Field(min_length=1)
    default_response_key: str | None = None

    @model_validator(mode="after")
    def keys_are_consistent(self) -> "CallResponse":
        seen: set[str] = set()
        for response in self.responses:
            for key in response.keys:
                lowered = key.lower()
                if lowered in seen:
                    raise ValueError(f"response key '{key}' is used more than once")
                seen.add(lowered)

        if self.default_response_key is not None and not any(
            response.matches(self.default_response_key) for response in self.responses
        ):
            raise ValueError(
                f"defaultResponseKey '{self.default_response_key}' "
                "does not match any response"
            )
        return self

    @property
    def default_key(self) -> str:
        if self.default_response_key is not None:
            return self.default_response_key
        return self.responses[0].main_key

    def info_fields(self, prefix: str = "") -> list[tuple[str, str]]:
        fields = super().info_fields(prefix)
        keys = [response.main_key for response in self.responses if response.main_key]
        if keys:
            fields.append(("Options", merge_list([f"`{key}`" for key in keys], "or")))
        return fields

    def respond(self, args: Sequence[str]) -> str | None:
        """
        Pick the reply for the tokens after the command name.

        Returns:
            The reply text, or None if no response key matches
        """
        key = " ".join(args) if args else self.default_key
        for response in self.responses:
            if response.matches(key):
                return response.contents
        return None

    async def process(
        self,
        args: Sequence[str],
        channel: Channel,
        handler: Handler | None = None,
        prefix: str = "",
    ) -> None:
        reply = self.respond(args)
        if reply is not None:
            await channel.send(reply)
        elif self.wants_info(args, min_args=0):
            await channel.send(render_info(self, prefix))
        else:
            await channel.send(
                "Error loading response (unknown term). "
                f"Try `{self.help_string(prefix)}` for more information."
            )
