"""Pydantic schemas for cards and messaging-extension responses.

Field names are snake_case in Python and serialize to the camelCase keys the
chat client expects (``attachmentLayout``, ``contentType``, ...).
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base model serialized with camelCase keys and without unset optionals."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ActionTypes:
    """Card action types understood by the client."""

    OPEN_URL = "openUrl"
    INVOKE = "invoke"


class CardImage(WireModel):
    url: str
    alt: str | None = None


class CardAction(WireModel):
    type: str
    title: str | None = None
    value: Any = None


class BasicCard(WireModel):
    """Fields shared by hero and thumbnail cards."""

    CONTENT_TYPE: ClassVar[str] = ""

    title: str | None = None
    subtitle: str | None = None
    text: str | None = None
    images: list[CardImage] | None = None
    buttons: list[CardAction] | None = None
    tap: CardAction | None = None

    def to_attachment(self) -> "Attachment":
        return Attachment(content_type=self.CONTENT_TYPE, content=self)


class HeroCard(BasicCard):
    CONTENT_TYPE: ClassVar[str] = "application/vnd.microsoft.card.hero"


class ThumbnailCard(BasicCard):
    CONTENT_TYPE: ClassVar[str] = "application/vnd.microsoft.card.thumbnail"


class Attachment(WireModel):
    content_type: str
    content: SerializeAsAny[BasicCard]


class MessagingExtensionAttachment(Attachment):
    """Attachment shown in the result list, with an optional compact preview."""

    preview: Attachment | None = None


class MessagingExtensionResult(WireModel):
    """Result envelope: a typed, laid-out list of attachments."""

    type: str = "result"
    attachment_layout: str = "list"
    attachments: list[MessagingExtensionAttachment] = Field(default_factory=list)


class MessagingExtensionResponse(WireModel):
    """Response to query and selectItem invokes."""

    compose_extension: MessagingExtensionResult


class MessagingExtensionActionResponse(WireModel):
    """Response to submitAction invokes."""

    compose_extension: MessagingExtensionResult


def result_list(attachments: list[MessagingExtensionAttachment]) -> MessagingExtensionResult:
    """Wrap attachments in a ``result`` envelope with ``list`` layout."""
    return MessagingExtensionResult(type="result", attachment_layout="list", attachments=attachments)
