"""Facts and failure reports."""

import textwrap
from typing import Literal

from pydantic import BaseModel, Field, SerializationInfo, field_serializer


class Fact(BaseModel):
    """A named piece of information in a failure report.

    Attributes
    ----------
    key
        Fact name. Downstream consumers match on it, so it is stable wording.
    value
        Rendered value, or ``None`` for a key-only fact (a sentence on its own).
    """

    key: str
    value: str | None = None

    @classmethod
    def simple(cls, key: str) -> "Fact":
        return cls(key=key)

    @classmethod
    def of(cls, key: str, value: str) -> "Fact":
        return cls(key=key, value=value)


class RecordedException(BaseModel):
    """An exception raised by a correspondence while comparing or diffing values.

    Attributes
    ----------
    phase
        ``"compare"`` or ``"format_diff"``.
    actual
        Display string of the actual argument.
    expected
        Display string of the expected argument.
    error_type
        Name of the exception class.
    error_message
        ``str()`` of the exception.
    traceback
        Formatted traceback captured at the point of failure.
    """

    phase: Literal["compare", "format_diff"]
    actual: str
    expected: str
    error_type: str
    error_message: str = ""
    traceback: str = ""

    @field_serializer("traceback")
    def _truncate(self, v: str, info: SerializationInfo) -> str:
        ctx = info.context or {}
        if ctx.get("truncate"):
            max_len = 80
            return v if len(v) <= max_len else v[:max_len] + "..."
        return v

    def summary(self) -> str:
        """One-line description, e.g. ``compare(None, TWO) threw AttributeError: ...``."""
        text = f"{self.phase}({self.actual}, {self.expected}) threw {self.error_type}"
        if self.error_message:
            text += f": {self.error_message}"
        return text

    def describe(self, include_traceback: bool = True) -> str:
        if include_traceback and self.traceback:
            return f"{self.summary()}\n---\n{self.traceback.rstrip()}"
        return self.summary()


class FailureReport(BaseModel):
    """Ordered failure report handed to a failure strategy.

    Attributes
    ----------
    messages
        Leading free-form lines (custom messages, ``name: <subject name>``).
    facts
        Ordered facts. The order is part of the contract.
    exceptions
        Every exception recorded while comparing or diffing values, in
        encounter order. Only the first per phase is rendered as a fact.
    """

    messages: list[str] = Field(default_factory=list)
    facts: list[Fact] = Field(default_factory=list)
    exceptions: list[RecordedException] = Field(default_factory=list)

    def keys(self) -> list[str]:
        return [fact.key for fact in self.facts]

    def value_of(self, key: str, index: int = 0) -> str | None:
        """Return the value of the ``index``-th fact named ``key``.

        Raises
        ------
        KeyError
            If fewer than ``index + 1`` facts carry that name.
        """
        matches = [fact for fact in self.facts if fact.key == key]
        if len(matches) <= index:
            raise KeyError(f"{key!r} (occurrence {index})")
        return matches[index].value

    def render(self) -> str:
        """Render the report as the final assertion message."""
        lines = list(self.messages)
        valued = [fact for fact in self.facts if fact.value is not None]
        multiline = any("\n" in fact.value for fact in valued)  # type: ignore[operator]
        width = max((len(fact.key) for fact in valued), default=0)
        for fact in self.facts:
            if fact.value is None:
                lines.append(fact.key)
            elif multiline:
                lines.append(f"{fact.key}:\n{textwrap.indent(fact.value, '    ')}")
            else:
                lines.append(f"{fact.key.ljust(width)}: {fact.value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return self.model_dump_json(indent=2, exclude_defaults=True, context={"truncate": True})
