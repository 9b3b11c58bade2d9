"""Selection handling: expand a tapped preview into a detail card."""

from __future__ import annotations

from typing import Any

from ..core.logging import get_logger
from ..schemas.cards import (
    ActionTypes,
    CardAction,
    CardImage,
    MessagingExtensionAttachment,
    MessagingExtensionResponse,
    ThumbnailCard,
    result_list,
)
from ..schemas.character import PreviewPayload

logger = get_logger(__name__)

PROFILE_BUTTON_TITLE = "Marvel Profile"


def build_detail_attachment(payload: PreviewPayload) -> MessagingExtensionAttachment:
    card = ThumbnailCard(
        title=payload.name,
        subtitle=f"{payload.actor}, {payload.real_name}",
        buttons=[CardAction(type=ActionTypes.OPEN_URL, title=PROFILE_BUTTON_TITLE, value=payload.profile_link)],
    )
    if payload.image_url:
        card.images = [CardImage(url=payload.image_url, alt="Icon")]
    return MessagingExtensionAttachment(content_type=ThumbnailCard.CONTENT_TYPE, content=card)


class SelectionHandler:
    """Stateless: the echoed payload carries everything the card needs."""

    async def handle_selection(self, payload: PreviewPayload | Any) -> MessagingExtensionResponse:
        if not isinstance(payload, PreviewPayload):
            payload = PreviewPayload.parse(payload)
        logger.debug("Item selected", extra={"character": payload.name})
        return MessagingExtensionResponse(compose_extension=result_list([build_detail_attachment(payload)]))
