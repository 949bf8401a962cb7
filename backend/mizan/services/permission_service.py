"""
Module permission checks.

Permission tables live with the auth collaborator; this module only reads
the resolved ``Permission`` records of the current user.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from mizan.db.models import PermissionLevel
from mizan.db.schemas import FinanceVisibility, ModuleAccess, Permission

# Navigation entry whose visibility depends on more than one module.
COMBINED_MODULES = {
    "fees": ("fees", "expenses"),
}

# Navigation modules, in sidebar order.
MODULE_IDS = (
    "dashboard",
    "ai-assistant",
    "cases",
    "hearings",
    "tasks",
    "generator",
    "clients",
    "locations",
    "references",
    "calculators",
    "documents",
    "archive",
    "fees",
    "reports",
    "settings",
)


def get_permission(permissions: Optional[Iterable[Permission]], module_id: str) -> PermissionLevel:
    """First matching record wins; no record means no access."""
    for perm in permissions or ():
        if perm.module_id == module_id:
            return perm.access
    return PermissionLevel.none


def has_access(permissions: Optional[Iterable[Permission]], module_id: str) -> bool:
    return get_permission(permissions, module_id) != PermissionLevel.none


def is_read_only(permissions: Optional[Iterable[Permission]], module_id: str) -> bool:
    return get_permission(permissions, module_id) == PermissionLevel.read


def can_show_module(permissions: Optional[Sequence[Permission]], module_id: str) -> bool:
    """Whether the module appears in navigation."""
    members = COMBINED_MODULES.get(module_id, (module_id,))
    return any(has_access(permissions, m) for m in members)


def finance_visibility(permissions: Optional[Sequence[Permission]]) -> FinanceVisibility:
    return FinanceVisibility(
        can_view_income=has_access(permissions, "fees"),
        can_view_expenses=has_access(permissions, "expenses"),
        read_only=is_read_only(permissions, "fees") and is_read_only(permissions, "expenses"),
    )


def resolve_modules(
    permissions: Optional[Sequence[Permission]],
    module_ids: Iterable[str],
) -> list[ModuleAccess]:
    return [
        ModuleAccess(
            module_id=module_id,
            access=get_permission(permissions, module_id),
            visible=can_show_module(permissions, module_id),
            read_only=is_read_only(permissions, module_id),
        )
        for module_id in module_ids
    ]
