from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.api.dependencies import get_session_scheduler
from backend.auth.dependencies import get_current_identity, require_admin
from backend.auth.identity import Identity
from backend.routes.schemas import MessageResponse
from backend.services.session_scheduler import SessionScheduler

router = APIRouter(tags=['sessions'])


class CreateSessionRequest(BaseModel):
    date: str | None = None
    time: str | None = None
    type: str | None = None
    notes: str | None = None


class UpdateSessionStatusRequest(BaseModel):
    status: str | None = None


class SessionResponse(BaseModel):
    id: int
    userId: int
    userName: str = ''
    date: str
    time: str
    type: str
    notes: str = ''
    status: str
    createdAt: str | None = None


@router.get('', response_model=list[SessionResponse])
def list_sessions(
    identity: Identity = Depends(get_current_identity),
    scheduler: SessionScheduler = Depends(get_session_scheduler),
):
    return scheduler.list(identity)


@router.get('/{session_id}', response_model=SessionResponse)
def get_session(
    session_id: int,
    identity: Identity = Depends(get_current_identity),
    scheduler: SessionScheduler = Depends(get_session_scheduler),
):
    return scheduler.get(session_id, identity)


@router.post('', response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def create_session(
    data: CreateSessionRequest,
    identity: Identity = Depends(get_current_identity),
    scheduler: SessionScheduler = Depends(get_session_scheduler),
):
    return scheduler.create(data.model_dump(), identity)


@router.put('/{session_id}/status', response_model=SessionResponse)
def update_session_status(
    session_id: int,
    data: UpdateSessionStatusRequest,
    _admin: Identity = Depends(require_admin),
    scheduler: SessionScheduler = Depends(get_session_scheduler),
):
    return scheduler.update_status(session_id, data.status)


@router.delete('/{session_id}', response_model=MessageResponse)
def delete_session(
    session_id: int,
    identity: Identity = Depends(get_current_identity),
    scheduler: SessionScheduler = Depends(get_session_scheduler),
):
    scheduler.delete(session_id, identity)
    return MessageResponse(message='Session deleted successfully')
