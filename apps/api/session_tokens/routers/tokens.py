from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import get_settings
from ..models.schemas import SessionTokenRequest, SessionTokenResponse
from ..services.errors import CredentialsNotConfiguredError, InvalidArgumentError, TokenSigningError
from ..services.token_types import TokenRequest
from ..services.tokens import SessionTokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["tokens"])


@lru_cache(maxsize=1)
def get_token_service() -> SessionTokenService:
    return SessionTokenService(get_settings())


@router.post("/{session_id}/token", response_model=SessionTokenResponse)
def issue_token(
    session_id: str,
    payload: SessionTokenRequest,
    service: SessionTokenService = Depends(get_token_service),
) -> SessionTokenResponse:
    request = TokenRequest(
        role=payload.role,
        expire_time=payload.expire_time,
        data=payload.data,
        initial_layout_class_list=payload.initial_layout_class_list,
    )
    try:
        token = service.issue_token(session_id, request, token_format=payload.format)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except CredentialsNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except TokenSigningError as exc:
        logger.error("Token signing failed for session %s: %s", session_id, exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Token signing failed") from exc

    return SessionTokenResponse(token=token, session_id=session_id, format=payload.format, role=payload.role)
