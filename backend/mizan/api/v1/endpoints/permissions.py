"""
Module access resolution for the current user's permission records
"""
from typing import List, Optional

from fastapi import APIRouter

from mizan.db.schemas import FinanceVisibility, ModuleAccess, Permission, SnapshotModel
from mizan.services.permission_service import MODULE_IDS, finance_visibility, resolve_modules

router = APIRouter()


class ResolveRequest(SnapshotModel):
    permissions: List[Permission]    = []
    modules:     Optional[List[str]] = None


class ResolveResponse(SnapshotModel):
    modules: List[ModuleAccess]
    finance: FinanceVisibility


@router.post("/resolve", response_model=ResolveResponse)
def resolve(body: ResolveRequest):
    module_ids = body.modules if body.modules is not None else MODULE_IDS
    return ResolveResponse(
        modules=resolve_modules(body.permissions, module_ids),
        finance=finance_visibility(body.permissions),
    )
