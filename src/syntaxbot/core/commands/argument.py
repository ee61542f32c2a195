"""Argument declarations for function commands."""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from syntaxbot.core.commands.arg_type import ArgType
from syntaxbot.core.exceptions import ConfigError
from syntaxbot.utils.def_loader import format_validation_error
from syntaxbot.utils.text import merge_list

DEFAULT_SIG_FIGS = 99


class Argument(BaseModel):
    """
    A named, typed argument declared by a function command.

    Numeric arguments carry bounds; each bound is inclusive or exclusive on
    its own. String arguments may restrict input to a set of allowed values.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    name: str
    description: str
    type: ArgType
    allowed_values: tuple[str, ...] | None = None
    default_value: str | None = None

    floor: float | None = None
    floor_inclusive: bool | None = None
    ceiling: float | None = None
    ceiling_inclusive: bool | None = None
    sig_figs: int = Field(default=DEFAULT_SIG_FIGS, ge=1)

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return ArgType.parse(v)
        return v

    @field_validator("allowed_values", mode="before")
    @classmethod
    def empty_means_unconstrained(cls, v: Any) -> Any:
        if v is None or len(v) == 0:
            return None
        return tuple(str(item) for item in v)

    @field_validator("default_value", mode="before")
    @classmethod
    def default_as_text(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return "true" if v else "false"
        return str(v)

    @model_validator(mode="after")
    def numeric_needs_bounds(self) -> "Argument":
        """Numbers must have both bounds and both inclusivity flags."""
        if not self.type.is_number:
            return self
        missing = [
            to_camel(field)
            for field in ("floor", "floor_inclusive", "ceiling", "ceiling_inclusive")
            if getattr(self, field) is None
        ]
        if missing:
            raise ValueError(
                f"numeric argument '{self.name}' is missing {', '.join(missing)}"
            )
        return self

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Argument":
        """
        Build an Argument from a declaration record.

        Raises:
            ConfigError: If a required key is missing or a value is invalid
        """
        try:
            return cls.model_validate(record)
        except ValidationError as e:
            label = record.get("name", "?") if isinstance(record, dict) else "?"
            raise ConfigError(
                f"Invalid argument '{label}': {format_validation_error(e)}"
            ) from e

    def matches(self, key: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == key.lower()

    def allowed_values_text(self) -> str:
        """Format allowed values as "'a', 'b' or 'c'"."""
        if not self.allowed_values:
            return ""
        return merge_list([f"'{value}'" for value in self.allowed_values], "or")

    def description_line(self) -> str:
        return f"{self} - {self.description}"

    def __str__(self) -> str:
        return f"[{self.name.lower()}]"
