import logging
from typing import Optional

from fastapi import Header, HTTPException

from analysis.analysis_client import AnalysisClient
from api import state
from storage.entity_store import EntityStore

logger = logging.getLogger(__name__)


def get_entity_store() -> EntityStore:
    if state.entity_store is None:
        raise HTTPException(status_code=503, detail="Storage not initialized")
    return state.entity_store


def get_analysis_client() -> AnalysisClient:
    if state.analysis_client is None:
        state.analysis_client = AnalysisClient()
    return state.analysis_client


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Owner id of the authenticated caller, set by the auth gateway."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return x_user_id.strip()
