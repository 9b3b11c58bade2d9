"""Query handling: substring search over the record store."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from ..core.logging import get_logger
from ..schemas.cards import (
    ActionTypes,
    CardAction,
    CardImage,
    HeroCard,
    MessagingExtensionAttachment,
    MessagingExtensionResponse,
    ThumbnailCard,
    result_list,
)
from ..schemas.character import QUERY_TEXT_PARAMETER, CharacterRecord, PreviewPayload, QueryParameter
from ..services.record_store import RecordStore

logger = get_logger(__name__)


def extract_search_text(parameters: Sequence[QueryParameter | dict[str, Any]] | None) -> str:
    """Return the search text carried by the first query parameter.

    Only the first parameter is consulted, and only when it is named
    ``queryText``; anything else (including no parameters) means "".

    Raises:
        MalformedQueryError: If ``parameters`` is not a list of objects.
    """
    params = QueryParameter.parse_list(parameters)
    if not params or params[0].name != QUERY_TEXT_PARAMETER:
        return ""
    return params[0].text


def matches(record: CharacterRecord, search_text: str) -> bool:
    """Case-insensitive containment of ``search_text`` in the record name.

    Characters are lowered one by one, so ``"SS"`` does not match ``"ß"``.
    """
    return search_text.lower() in record.name.lower()


def find_characters(records: Iterable[CharacterRecord], search_text: str) -> list[CharacterRecord]:
    return [record for record in records if matches(record, search_text)]


def build_preview_attachment(record: CharacterRecord) -> MessagingExtensionAttachment:
    """Hero card with the title only, plus a tappable thumbnail preview."""
    preview = ThumbnailCard(
        title=record.name,
        tap=CardAction(type=ActionTypes.INVOKE, value=PreviewPayload.from_record(record).to_value()),
    )
    if record.image_url:
        preview.images = [CardImage(url=record.image_url, alt="Icon")]

    return MessagingExtensionAttachment(
        content_type=HeroCard.CONTENT_TYPE,
        content=HeroCard(title=record.name),
        preview=preview.to_attachment(),
    )


class QueryHandler:
    def __init__(self, store: RecordStore):
        self.store = store

    async def handle_query(
        self, parameters: Sequence[QueryParameter | dict[str, Any]] | None
    ) -> MessagingExtensionResponse:
        search_text = extract_search_text(parameters)
        records = await self.store.get_records()
        found = find_characters(records, search_text)
        logger.debug(
            "Query handled",
            extra={"search_text": search_text, "record_count": len(records), "match_count": len(found)},
        )
        return MessagingExtensionResponse(
            compose_extension=result_list([build_preview_attachment(r) for r in found])
        )
