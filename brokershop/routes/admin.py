"""Admin routes - role and user administration."""
from fastapi import APIRouter, Depends, Request

from ..dependencies import EntityId, get_db, require_admin, get_account_service
from ..schemas import ResponseModel, RoleAssignment, RoleCreate, RoleModel, UserModel

router = APIRouter()


@router.get("/api/auth/admin/roles")
def list_roles(request: Request, db=Depends(get_db)):
    """List all roles."""
    require_admin(request)

    roles = get_account_service(db).list_roles()
    return ResponseModel.success(
        f"{len(roles)} role(s)",
        [RoleModel(**role) for role in roles]
    )


@router.post("/api/auth/admin/roles", status_code=201)
def create_role(request: Request, data: RoleCreate, db=Depends(get_db)):
    """Create a role."""
    require_admin(request)

    role = get_account_service(db).create_role(data.name)
    return ResponseModel.success(f"Role {role['name']} created", RoleModel(**role))


@router.get("/api/auth/admin/roles/{role_id}/users")
@router.get("/admin/roles/{role_id}/users")
def list_role_users(request: Request, role_id: EntityId, db=Depends(get_db)):
    """List users granted a role."""
    require_admin(request)

    users = get_account_service(db).users_in_role(role_id)
    return ResponseModel.success(
        f"{len(users)} user(s)",
        [UserModel.from_row(user) for user in users]
    )


@router.get("/api/auth/admin/users")
def list_users(request: Request, db=Depends(get_db)):
    """List all users."""
    require_admin(request)

    users = get_account_service(db).list_users()
    return ResponseModel.success(
        f"{len(users)} user(s)",
        [UserModel.from_row(user) for user in users]
    )


@router.patch("/api/auth/admin/users/{user_id}/role")
def assign_role(request: Request, user_id: EntityId, data: RoleAssignment, db=Depends(get_db)):
    """Move a user to another role."""
    require_admin(request)

    user = get_account_service(db).assign_role(user_id, data.role_id)
    return ResponseModel.success(
        f"User {user['name']} is now {user['role_name']}",
        UserModel.from_row(user)
    )
