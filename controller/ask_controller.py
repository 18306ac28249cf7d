# controller/ask_controller.py
from fastapi import APIRouter, Depends, status
from controller.controller_dependencies import get_privilege, get_search_service
from controller.limits import rate_limited
from core.redaction import Privilege
from model.api import SearchRequest, SearchResponse
from service.search_service import SearchService
from util.constants import InternalURIs

ask_router = APIRouter(dependencies=rate_limited())


@ask_router.post(
    InternalURIs.ASK,
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
)
async def ask(
    payload: SearchRequest,
    privilege: Privilege = Depends(get_privilege),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    return await service.search(payload.query, payload.k, privilege)
