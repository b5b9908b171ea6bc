from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.api.dependencies import get_group_registry
from backend.auth.dependencies import require_admin, require_student
from backend.auth.identity import Identity
from backend.routes.schemas import MessageResponse
from backend.services.group_registry import GroupRegistry

router = APIRouter(tags=['groups'])


class CreateGroupRequest(BaseModel):
    name: str | None = None
    description: str | None = None


class GroupResponse(BaseModel):
    id: int
    name: str
    description: str
    members: list[int] = []
    createdAt: str | None = None


class MembershipResponse(BaseModel):
    message: str
    group: GroupResponse


@router.get('', response_model=list[GroupResponse])
def list_groups(registry: GroupRegistry = Depends(get_group_registry)):
    return registry.list()


@router.get('/{group_id}', response_model=GroupResponse)
def get_group(group_id: int, registry: GroupRegistry = Depends(get_group_registry)):
    return registry.get(group_id)


@router.post('', response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    data: CreateGroupRequest,
    _admin: Identity = Depends(require_admin),
    registry: GroupRegistry = Depends(get_group_registry),
):
    return registry.create(data.model_dump())


@router.post('/{group_id}/join', response_model=MembershipResponse)
def join_group(
    group_id: int,
    student: Identity = Depends(require_student),
    registry: GroupRegistry = Depends(get_group_registry),
):
    group = registry.join(group_id, student.user_id)
    return {'message': 'Joined group successfully', 'group': group}


@router.post('/{group_id}/leave', response_model=MembershipResponse)
def leave_group(
    group_id: int,
    student: Identity = Depends(require_student),
    registry: GroupRegistry = Depends(get_group_registry),
):
    group = registry.leave(group_id, student.user_id)
    return {'message': 'Left group successfully', 'group': group}


@router.delete('/{group_id}', response_model=MessageResponse)
def delete_group(
    group_id: int,
    _admin: Identity = Depends(require_admin),
    registry: GroupRegistry = Depends(get_group_registry),
):
    registry.delete(group_id)
    return MessageResponse(message='Group deleted successfully')
