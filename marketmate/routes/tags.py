"""AI tag suggestion API routes"""

from typing import Optional
from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Depends

from ..services.tagging import TagSuggestionClient, TagSuggestionError
from .dependencies import get_tag_client

router = APIRouter(prefix="/api/tags", tags=["Tags"])

SUGGESTION_FAILED = (
    "Failed to suggest tags. The AI model might be busy. Please try again later."
)


class SuggestTagsRequest(BaseModel):
    """Request for tag suggestions"""
    description: str


class SuggestTagsResponse(BaseModel):
    """Suggested tags for a description"""
    tags: list[str]


@router.post("/suggest", response_model=SuggestTagsResponse)
async def suggest_tags(
    request: SuggestTagsRequest,
    tag_client: Optional[TagSuggestionClient] = Depends(get_tag_client),
):
    """Suggest tags for a product description"""
    if tag_client is None:
        raise HTTPException(status_code=503, detail="Tag suggestion is not configured")

    try:
        tags = await tag_client.suggest_tags(request.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TagSuggestionError:
        raise HTTPException(status_code=503, detail=SUGGESTION_FAILED)

    return SuggestTagsResponse(tags=tags)
