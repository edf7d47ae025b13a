"""Thin API layer: interaction tracking, recent preferences, recommendations."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from snacksmart.core import identity as identities
from snacksmart.core.security import get_optional_user_id
from snacksmart.db.session import get_db
from snacksmart.models import MAX_INTEGER_ID
from snacksmart.services import preference_service

router = APIRouter(prefix="/preferences", tags=["preferences"])


class TrackRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[int] = Field(None, alias="productId", ge=1, le=MAX_INTEGER_ID)
    action_type: Optional[str] = Field(None, alias="actionType")
    session_id: Optional[str] = Field(None, alias="sessionId")


class ClearRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")


@router.post("/track", status_code=status.HTTP_201_CREATED)
def track(
    body: TrackRequest,
    user_id: Optional[int] = Depends(get_optional_user_id),
):
    """
    Record a search/click/view. A bearer token takes precedence over sessionId.
    """
    identity = identities.resolve(user_id, body.session_id)
    with get_db() as db:
        preference = preference_service.track_interaction(db, identity, body.product_id, body.action_type)
    return {"message": "Interaction tracked successfully", "preference": preference}


@router.get("/recent")
def recent(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    user_id: Optional[int] = Depends(get_optional_user_id),
):
    """Recent interaction rows and up to 4 distinct active products; empty for anonymous callers."""
    identity = identities.resolve(user_id, session_id)
    with get_db() as db:
        return preference_service.get_recent_preferences(db, identity)


@router.get("/recommendations")
def recommendations(
    session_id: Optional[str] = Query(None, alias="sessionId"),
    user_id: Optional[int] = Depends(get_optional_user_id),
):
    identity = identities.resolve(user_id, session_id)
    with get_db() as db:
        return {"recommendations": preference_service.get_recommendations(db, identity)}


@router.delete("/clear")
def clear(
    body: Optional[ClearRequest] = None,
    user_id: Optional[int] = Depends(get_optional_user_id),
):
    identity = identities.resolve(user_id, body.session_id if body else None)
    with get_db() as db:
        preference_service.clear_preferences(db, identity)
    return {"message": "Preferences cleared successfully"}
