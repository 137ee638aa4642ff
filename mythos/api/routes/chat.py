"""Chat endpoints: sessions and message turns."""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from ..dependencies import Controller
from ..models.requests import ChatRequest
from ..models.responses import ChatReplyResponse, ChatSessionListResponse, ChatSessionResponse
from ..services.studio import SessionNotFoundError

router = APIRouter()


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Chat session {session_id} not found",
    )


@router.get(
    "/sessions",
    response_model=ChatSessionListResponse,
    summary="List chat sessions",
    description="Sessions ordered by most recent activity, with the last open session id.",
)
async def list_sessions(controller: Controller):
    return ChatSessionListResponse(
        sessions=[ChatSessionResponse.from_domain(s) for s in controller.chats.list()],
        last_session_id=controller.chats.get_last_session_id(),
    )


@router.get(
    "/sessions/{session_id}",
    response_model=ChatSessionResponse,
    summary="Get a chat session",
)
async def get_session(session_id: str, controller: Controller):
    session = controller.chats.get(session_id)
    if session is None:
        raise _not_found(session_id)
    return ChatSessionResponse.from_domain(session)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a chat session",
)
async def delete_session(session_id: str, controller: Controller):
    try:
        controller.delete_chat(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post(
    "/",
    response_model=ChatReplyResponse,
    summary="Send a message",
    description=(
        "Send a message, optionally with images. Starts a new session when session_id is omitted. "
        "Connection failures produce an apology reply rather than an error."
    ),
)
async def send_message(request: ChatRequest, controller: Controller):
    try:
        session, reply = await controller.send_chat(
            request.text, request.session_id, request.attachments, request.model
        )
    except SessionNotFoundError:
        raise _not_found(request.session_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ChatReplyResponse(
        session=ChatSessionResponse.from_domain(session),
        text=reply.text,
        generated_image=reply.generated_image,
    )


@router.post(
    "/sessions/{session_id}/regenerate",
    response_model=ChatReplyResponse,
    summary="Regenerate the last reply",
    description="Re-send the last user message with the history before it and replace the reply that followed.",
)
async def regenerate_reply(session_id: str, controller: Controller, model: Optional[str] = None):
    try:
        session, reply = await controller.regenerate_chat(session_id, model)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ChatReplyResponse(
        session=ChatSessionResponse.from_domain(session),
        text=reply.text,
        generated_image=reply.generated_image,
    )
