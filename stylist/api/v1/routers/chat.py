# stylist/api/v1/routers/chat.py
from fastapi import APIRouter, Depends, HTTPException
import time
import logging

from stylist.api.deps import catalog_dep, completer_dep, sessions_dep
from stylist.api.v1.schemas.chat import ChatIn, SessionOut
from stylist.domain.models.chat import ChatMessage
from stylist.domain.repositories.session_repo import get_or_create
from stylist.domain.services.conversation_svc import respond

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/{conversation_id}/messages", response_model=ChatMessage)
async def post_message(
    conversation_id: str,
    body: ChatIn,
    sessions = Depends(sessions_dep),
    catalog = Depends(catalog_dep),
    completer = Depends(completer_dep),
):
    """
    One chat turn. The session is created on the first message and saved
    after every reply; the reply always arrives, possibly as an apology.
    """
    logger.info("Request: chat conversation_id=%s chars=%s", conversation_id, len(body.text))
    start_time = time.perf_counter()

    session = await get_or_create(sessions, conversation_id)
    reply = await respond(session=session, text=body.text, catalog=catalog, completer=completer)
    await sessions.save(session)

    logger.info(
        "Response: chat conversation_id=%s products=%s elapsed_time=%.4fs",
        conversation_id, len(reply.products or []), time.perf_counter() - start_time,
    )
    return reply


@router.get("/{conversation_id}", response_model=SessionOut)
async def get_session(conversation_id: str, sessions = Depends(sessions_dep)):
    session = await sessions.get(conversation_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown conversation")
    return SessionOut(
        conversation_id=session.conversation_id,
        preferences=session.preferences,
        messages=session.messages,
        count=len(session.messages),
    )


@router.delete("/{conversation_id}")
async def end_session(conversation_id: str, sessions = Depends(sessions_dep)):
    ended = await sessions.end(conversation_id)
    logger.info("Chat session ended conversation_id=%s existed=%s", conversation_id, ended)
    return {"conversation_id": conversation_id, "ended": ended}
