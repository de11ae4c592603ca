from journal.rbac.permissions import (
    AdminUserDep,
    AuthorUserDep,
    EditorOrAdminDep,
    can_delete,
    can_edit,
    can_view,
    ensure_can_delete,
    ensure_can_edit,
    is_admin,
    is_editor_or_admin,
    require_role,
)

__all__ = [
    "AdminUserDep",
    "AuthorUserDep",
    "EditorOrAdminDep",
    "can_delete",
    "can_edit",
    "can_view",
    "ensure_can_delete",
    "ensure_can_edit",
    "is_admin",
    "is_editor_or_admin",
    "require_role",
]
