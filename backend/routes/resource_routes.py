from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.api.dependencies import get_resource_catalog
from backend.auth.dependencies import require_admin
from backend.auth.identity import Identity
from backend.routes.schemas import MessageResponse
from backend.services.resource_catalog import ResourceCatalog

router = APIRouter(tags=['resources'])


class CreateResourceRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    content: str | None = None
    type: str | None = None


class UpdateResourceRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    content: str | None = None
    type: str | None = None


class ResourceResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str
    content: str = ''
    type: str
    createdAt: str | None = None


@router.get('', response_model=list[ResourceResponse])
def list_resources(catalog: ResourceCatalog = Depends(get_resource_catalog)):
    return catalog.list()


@router.get('/{resource_id}', response_model=ResourceResponse)
def get_resource(resource_id: int, catalog: ResourceCatalog = Depends(get_resource_catalog)):
    return catalog.get(resource_id)


@router.post('', response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
def create_resource(
    data: CreateResourceRequest,
    _admin: Identity = Depends(require_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
):
    return catalog.create(data.model_dump())


@router.put('/{resource_id}', response_model=ResourceResponse)
def update_resource(
    resource_id: int,
    data: UpdateResourceRequest,
    _admin: Identity = Depends(require_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
):
    return catalog.update(resource_id, data.model_dump(exclude_unset=True))


@router.delete('/{resource_id}', response_model=MessageResponse)
def delete_resource(
    resource_id: int,
    _admin: Identity = Depends(require_admin),
    catalog: ResourceCatalog = Depends(get_resource_catalog),
):
    catalog.delete(resource_id)
    return MessageResponse(message='Resource deleted successfully')
