"""Message endpoint: one user activity in, the bot's replies out."""

from fastapi import APIRouter

from cafebot.api.dependencies import BotDep
from cafebot.api.exceptions import InvalidRequestError
from cafebot.api.models.messages import MessageRequest, MessageResponse
from cafebot.conversation.models import Activity
from cafebot.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/messages", response_model=MessageResponse)
async def post_message(request: MessageRequest, bot: BotDep) -> MessageResponse:
    """Process a typed message or a card submission.

    Raises:
        InvalidRequestError: If the request carries neither text nor a card value
    """
    text = request.text or ""
    if not text.strip() and not request.value:
        raise InvalidRequestError("A message needs text or a card value")

    activity = Activity(
        conversation_id=request.conversation_id,
        user_id=request.user_id,
        text=text,
        value=request.value,
    )
    reply = await bot.on_turn(activity)

    logger.debug(
        "message_processed",
        conversation_id=reply.conversation_id,
        status=reply.status.value,
        messages=len(reply.messages),
    )
    return MessageResponse.model_validate(reply.model_dump())
