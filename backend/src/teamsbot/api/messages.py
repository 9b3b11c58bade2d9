"""Bot messaging endpoint.

The chat client's bot service posts every activity here. Invoke activities
are answered with the messaging extension's response body; everything else
is acknowledged with an empty 200.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict

from ..core.logging import get_logger
from ..extension.handler import MessagingExtensionHandler, get_extension_handler

logger = get_logger(__name__)

router = APIRouter(tags=["messages"])


class Activity(BaseModel):
    """The subset of a bot-framework activity this endpoint reads."""

    model_config = ConfigDict(extra="allow")

    type: str
    name: str | None = None
    value: Any = None
    id: str | None = None


@router.post("/messages", summary="Receive a bot activity")
async def receive_activity(
    activity: Activity,
    request: Request,
    handler: MessagingExtensionHandler = Depends(get_extension_handler),
):
    if activity.type != "invoke":
        logger.debug(
            "Activity acknowledged",
            extra={"activity_type": activity.type, "request_id": getattr(request.state, "request_id", None)},
        )
        return Response(status_code=200)

    response = await handler.on_invoke(activity.name, activity.value)
    logger.info(
        "Invoke handled",
        extra={
            "invoke_name": activity.name,
            "attachment_count": len(response.compose_extension.attachments),
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    return JSONResponse(content=response.to_wire(), status_code=200)
