"""
Pydantic schemas for the messaging extension.

This package contains the character data model, the validated invoke
inputs, and the card/response models sent back to the client.
"""

from .cards import (
    Attachment,
    CardAction,
    CardImage,
    HeroCard,
    MessagingExtensionActionResponse,
    MessagingExtensionAttachment,
    MessagingExtensionResponse,
    MessagingExtensionResult,
    ThumbnailCard,
)
from .character import CharacterRecord, CreateCardInput, PreviewPayload, QueryParameter

__all__ = [
    "Attachment",
    "CardAction",
    "CardImage",
    "CharacterRecord",
    "CreateCardInput",
    "HeroCard",
    "MessagingExtensionActionResponse",
    "MessagingExtensionAttachment",
    "MessagingExtensionResponse",
    "MessagingExtensionResult",
    "PreviewPayload",
    "QueryParameter",
    "ThumbnailCard",
]
