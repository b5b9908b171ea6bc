from fastapi import Depends, Request

from backend.services.assessment_engine import AssessmentEngine
from backend.services.group_registry import GroupRegistry
from backend.services.resource_catalog import ResourceCatalog
from backend.services.session_scheduler import SessionScheduler
from backend.services.user_accounts import UserAccounts
from backend.storage.base import EntityStore
from backend.storage.seeds import ASSESSMENTS, GROUPS, RESOURCES, SESSIONS, USERS


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_user_accounts(request: Request, store: EntityStore = Depends(get_store)) -> UserAccounts:
    return UserAccounts(
        store.collection(USERS),
        allow_admin_registration=request.app.state.allow_admin_registration,
    )


def get_resource_catalog(store: EntityStore = Depends(get_store)) -> ResourceCatalog:
    return ResourceCatalog(store.collection(RESOURCES))


def get_session_scheduler(request: Request, store: EntityStore = Depends(get_store)) -> SessionScheduler:
    return SessionScheduler(
        store.collection(SESSIONS),
        strict_transitions=request.app.state.strict_session_transitions,
    )


def get_group_registry(store: EntityStore = Depends(get_store)) -> GroupRegistry:
    return GroupRegistry(store.collection(GROUPS))


def get_assessment_engine(store: EntityStore = Depends(get_store)) -> AssessmentEngine:
    return AssessmentEngine(store.collection(ASSESSMENTS))
