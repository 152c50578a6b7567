"""Gemini chat, content and token count endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger

from gemini_bridge.exceptions import GeminiAPIError
from gemini_bridge.models.request import ChatRequest, ContentRequest, TokenCountRequest
from gemini_bridge.models.response import ErrorResponse, GenerationResult, TokenBudgetResult
from gemini_bridge.services.gemini import GeminiService


router = APIRouter(prefix="/api/gemini")


def get_service(request: Request) -> GeminiService:
    """Build a service over the context created at startup."""
    return GeminiService(request.app.state.context)


@router.post(
    "/chat",
    response_model=GenerationResult,
    response_model_exclude_none=True,
    summary="Send a chat turn",
    description="Send a new user message on top of the supplied conversation history.",
)
async def chat(
    request: ChatRequest,
    service: GeminiService = Depends(get_service),
) -> GenerationResult:
    logger.info(f"Received chat request with {len(request.history)} history items")
    return await service.chat(request)


@router.post(
    "/content",
    response_model=GenerationResult,
    response_model_exclude_none=True,
    summary="Generate content",
    description="Generate content from a prompt or a list of text/image parts.",
)
async def content(
    request: ContentRequest,
    service: GeminiService = Depends(get_service),
) -> GenerationResult:
    logger.info(f"Received content request with {len(request.parts or [])} parts")
    return await service.content(request)


@router.post(
    "/token-count",
    response_model=TokenBudgetResult,
    responses={
        502: {"model": ErrorResponse, "description": "Token counting failed upstream"},
    },
    summary="Count tokens",
    description=(
        "Count tokens for a prompt, parts or history. With a positive limit, "
        "validIndex marks where the suffix that fits the limit begins."
    ),
)
async def token_count(
    request: TokenCountRequest,
    service: GeminiService = Depends(get_service),
) -> TokenBudgetResult:
    try:
        return await service.token_count(request)
    except GeminiAPIError as e:
        logger.error(f"Token count failed: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": e.status_code or 502,
                    "message": e.message,
                    "status": e.status or "BAD_GATEWAY",
                }
            },
        )
    except Exception as e:
        logger.exception(f"Unexpected error during token count: {e}")
        raise HTTPException(
            status_code=500,
            detail={
                "error": {
                    "code": 500,
                    "message": f"Internal server error: {str(e)}",
                    "status": "INTERNAL",
                }
            },
        )


@router.get(
    "/models",
    summary="List configured models",
    description="List the text and vision model variants requests are routed to.",
)
async def list_models(request: Request):
    context = request.app.state.context
    return {
        "models": [
            {
                "name": f"models/{context.text_model}",
                "variant": "text",
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
            {
                "name": f"models/{context.vision_model}",
                "variant": "vision",
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
        ]
    }
