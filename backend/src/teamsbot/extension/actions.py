"""Action handling: dispatch submitAction invokes to registered commands.

Command ids are declared in the extension manifest; each id maps to one
``Command`` in a ``CommandRegistry``. New commands are added by registering
them, not by editing the dispatcher.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..core.exceptions import UnknownCommandError
from ..core.logging import get_logger
from ..schemas.cards import (
    CardImage,
    HeroCard,
    MessagingExtensionActionResponse,
    MessagingExtensionAttachment,
    result_list,
)
from ..schemas.character import CreateCardInput

logger = get_logger(__name__)

CREATE_AVENGER_COMMAND_ID = "CreateAvenger"


@runtime_checkable
class Command(Protocol):
    command_id: str

    def execute(self, data: Any) -> MessagingExtensionAttachment:
        """Build the attachment for this command from the submitted form data."""
        ...


class CreateAvengerCommand:
    """Compose a hero card from the name and actor the user typed in.

    The submitted image is ignored; every card gets the same placeholder.
    """

    command_id = CREATE_AVENGER_COMMAND_ID

    def __init__(self, placeholder_image_url: str):
        self.placeholder_image_url = placeholder_image_url

    def execute(self, data: CreateCardInput | Any) -> MessagingExtensionAttachment:
        if not isinstance(data, CreateCardInput):
            data = CreateCardInput.parse(self.command_id, data)
        card = HeroCard(
            title=data.name,
            subtitle=data.actor,
            images=[CardImage(url=self.placeholder_image_url)],
        )
        return MessagingExtensionAttachment(
            content_type=HeroCard.CONTENT_TYPE,
            content=card,
            preview=card.to_attachment(),
        )


class CommandRegistry:
    def __init__(self, commands: list[Command] | None = None):
        self._commands: dict[str, Command] = {}
        for command in commands or []:
            self.register(command)

    def register(self, command: Command) -> None:
        if command.command_id in self._commands:
            raise ValueError(f"Command '{command.command_id}' is already registered")
        self._commands[command.command_id] = command

    def get(self, command_id: str | None) -> Command:
        command = self._commands.get(command_id) if command_id is not None else None
        if command is None:
            raise UnknownCommandError(command_id)
        return command

    def command_ids(self) -> list[str]:
        return list(self._commands)


class ActionHandler:
    def __init__(self, registry: CommandRegistry):
        self.registry = registry

    async def handle_action(self, command_id: str | None, data: Any) -> MessagingExtensionActionResponse:
        command = self.registry.get(command_id)
        attachment = command.execute(data)
        logger.debug("Command executed", extra={"command_id": command_id})
        return MessagingExtensionActionResponse(compose_extension=result_list([attachment]))


def default_registry(placeholder_image_url: str) -> CommandRegistry:
    return CommandRegistry([CreateAvengerCommand(placeholder_image_url)])
