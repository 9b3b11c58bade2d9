"""Messaging extension entry point: route invoke events to their handler."""

from __future__ import annotations

from typing import Any

from ..core.config import get_settings_instance
from ..core.exceptions import UnsupportedInvokeError
from ..core.logging import get_logger
from ..schemas.cards import MessagingExtensionActionResponse, MessagingExtensionResponse
from ..services.record_store import RecordStore, get_record_store
from .actions import ActionHandler, CommandRegistry, default_registry
from .query import QueryHandler
from .selection import SelectionHandler

logger = get_logger(__name__)

QUERY_INVOKE = "composeExtension/query"
SELECT_ITEM_INVOKE = "composeExtension/selectItem"
SUBMIT_ACTION_INVOKE = "composeExtension/submitAction"


class MessagingExtensionHandler:
    """Answers query, selectItem and submitAction invokes.

    Each invoke is independent; the only shared state is the read-only
    record store.
    """

    def __init__(self, store: RecordStore, registry: CommandRegistry):
        self.store = store
        self.registry = registry
        self._query = QueryHandler(store)
        self._selection = SelectionHandler()
        self._actions = ActionHandler(registry)

    async def handle_query(self, parameters: Any) -> MessagingExtensionResponse:
        return await self._query.handle_query(parameters)

    async def handle_selection(self, payload: Any) -> MessagingExtensionResponse:
        return await self._selection.handle_selection(payload)

    async def handle_action(self, command_id: str | None, data: Any) -> MessagingExtensionActionResponse:
        return await self._actions.handle_action(command_id, data)

    async def on_invoke(
        self, name: str | None, value: Any
    ) -> MessagingExtensionResponse | MessagingExtensionActionResponse:
        """Dispatch a raw invoke activity by name.

        ``value`` is the activity's untyped ``value`` field.
        """
        logger.debug("Invoke received", extra={"invoke_name": name})
        if name == QUERY_INVOKE:
            parameters = value.get("parameters") if isinstance(value, dict) else None
            return await self.handle_query(parameters)
        if name == SELECT_ITEM_INVOKE:
            return await self.handle_selection(value)
        if name == SUBMIT_ACTION_INVOKE:
            value = value if isinstance(value, dict) else {}
            return await self.handle_action(value.get("commandId"), value.get("data"))
        raise UnsupportedInvokeError(name)


_handler: MessagingExtensionHandler | None = None


def get_extension_handler() -> MessagingExtensionHandler:
    """Get the process-wide handler wired to the configured store and commands."""
    global _handler  # noqa: PLW0603
    if _handler is None:
        settings = get_settings_instance()
        _handler = MessagingExtensionHandler(get_record_store(), default_registry(settings.placeholder_image_url))
    return _handler
