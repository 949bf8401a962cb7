from mizan.db.models import PermissionLevel
from mizan.db.schemas import Permission
from mizan.services.permission_service import (
    MODULE_IDS,
    can_show_module,
    finance_visibility,
    get_permission,
    has_access,
    is_read_only,
    resolve_modules,
)


def perms(**levels):
    return [Permission(module_id=m.replace("_", "-"), access=a) for m, a in levels.items()]


def test_missing_record_means_no_access():
    assert get_permission([], "cases") == PermissionLevel.none
    assert get_permission(None, "cases") == PermissionLevel.none
    assert not has_access(None, "cases")


def test_first_record_wins():
    records = [
        Permission(module_id="cases", access="read"),
        Permission(module_id="cases", access="write"),
    ]
    assert get_permission(records, "cases") == PermissionLevel.read
    assert is_read_only(records, "cases")


def test_write_is_not_read_only():
    records = perms(cases="write")
    assert has_access(records, "cases")
    assert not is_read_only(records, "cases")


def test_fees_entry_visible_with_either_module():
    assert can_show_module(perms(expenses="read"), "fees")
    assert can_show_module(perms(fees="write"), "fees")
    assert not can_show_module(perms(cases="write"), "fees")


def test_finance_visibility():
    vis = finance_visibility(perms(fees="read", expenses="read"))
    assert vis.can_view_income and vis.can_view_expenses
    assert vis.read_only

    vis = finance_visibility(perms(fees="write", expenses="read"))
    assert not vis.read_only

    vis = finance_visibility(perms(expenses="write"))
    assert not vis.can_view_income
    assert vis.can_view_expenses


def test_resolve_modules_keeps_order():
    resolved = resolve_modules(perms(dashboard="read", ai_assistant="write"), MODULE_IDS)

    assert [m.module_id for m in resolved] == list(MODULE_IDS)
    by_id = {m.module_id: m for m in resolved}
    assert by_id["dashboard"].visible and by_id["dashboard"].read_only
    assert by_id["ai-assistant"].access == PermissionLevel.write
    assert not by_id["settings"].visible
