"""
Structured responses: the bounded, multi-field message the bot replies with.

Responses are frozen; every builder returns a new value.
"""
from dataclasses import dataclass, field, replace

from repobot.constants import DEFAULT_COLOR, MAX_DESCRIPTION_LENGTH


@dataclass(frozen=True)
class Field:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Author:
    name: str
    icon_url: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class StructuredResponse:
    description: str = ""
    title: str | None = None
    url: str | None = None
    color: int = DEFAULT_COLOR
    thumbnail_url: str | None = None
    image_url: str | None = None
    author: Author | None = None
    fields: tuple[Field, ...] = field(default_factory=tuple)
    footer: str | None = None
    error: bool = False

    def with_fields(self, *fields: Field) -> "StructuredResponse":
        return replace(self, fields=self.fields + tuple(fields))

    def with_footer(self, footer: str) -> "StructuredResponse":
        return replace(self, footer=footer)


def message(text: str) -> StructuredResponse:
    return StructuredResponse(description=text)


def failure(text: str) -> StructuredResponse:
    return StructuredResponse(description=text, error=True)


def bounded(text: str, fallback: str) -> str:
    """Return text if it fits the description limit, otherwise the clipped fallback."""
    if len(text) <= MAX_DESCRIPTION_LENGTH:
        return text
    return fallback[:MAX_DESCRIPTION_LENGTH]


def bounded_description(header: str, body: str, placeholder: str, separator: str = "\n\n") -> str:
    """
    Join header and body; if that would exceed the description limit, keep the
    header and swap the body for the placeholder.
    """
    if not header:
        return bounded(body, placeholder)
    return bounded(f"{header}{separator}{body}", f"{header}{separator}{placeholder}")
