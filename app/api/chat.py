from fastapi import APIRouter, Depends
from openai import AsyncOpenAI

from app.schemas.agenda import ChatRequest, ChatResponse
from app.services.chat import send_chat_message
from app.services.llm import get_llm_client

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat_endpoint(
    request: ChatRequest,
    client: AsyncOpenAI = Depends(get_llm_client),
):
    # send_chat_message never raises; failures come back as an apology reply
    reply = await send_chat_message(request.history, request.message, client, request.file)
    return ChatResponse(reply=reply)
