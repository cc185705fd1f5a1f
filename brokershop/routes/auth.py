"""Authentication routes."""
from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from ..config import (
    SESSION_COOKIE, SESSION_HOURS, SESSION_MAX_AGE, COOKIE_SECURE,
    AUTH_ERROR_URL, SIGNED_OUT_URL
)
from ..dependencies import (
    EntityId, get_db, get_current_user, require_user,
    get_auth_service, get_account_service
)
from ..schemas import ResponseModel, RoleModel, UserCreate, UserModel

router = APIRouter()


@router.post("/login")
def login(
    username: str = Form(""),
    password: str = Form(""),
    db=Depends(get_db)
):
    """Process login form.

    Success answers 200 with the session cookie; bad credentials
    redirect to the auth error endpoint.
    """
    result = get_auth_service(db).sign_in(username, password, SESSION_HOURS)
    if not result:
        return RedirectResponse(url=AUTH_ERROR_URL, status_code=302)

    user, session_id = result
    body = ResponseModel.success(
        f"User {user['name']} signed in",
        UserModel.from_row(user).model_dump()
    )
    response = JSONResponse(content=body.model_dump())
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session_id,
        httponly=True,
        samesite="lax",
        secure=COOKIE_SECURE,
        max_age=SESSION_MAX_AGE
    )
    return response


@router.get("/logout")
@router.post("/logout")
def logout(request: Request, db=Depends(get_db)):
    """Logout user."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        get_auth_service(db).sign_out(session_id)

    response = RedirectResponse(url=SIGNED_OUT_URL, status_code=302)
    response.delete_cookie(SESSION_COOKIE)
    return response


@router.get(AUTH_ERROR_URL)
def on_auth_error():
    return JSONResponse(
        status_code=401,
        content=ResponseModel.fail("Authentication failed").model_dump()
    )


@router.get(SIGNED_OUT_URL)
def signed_out():
    return ResponseModel.success("Signed out")


@router.get("/api/auth/user/check")
def check_user(request: Request):
    """Report who the caller is signed in as."""
    user = get_current_user(request)
    if not user:
        return ResponseModel.success("User is a Guest")

    model = UserModel(
        id=user["id"],
        name=user["name"],
        role=RoleModel(id=user["role_id"], name=user["role"])
    )
    return ResponseModel.success(f"User {user['name']} is signed in", model)


@router.post("/api/auth/user", status_code=201)
def register(data: UserCreate, db=Depends(get_db)):
    """Register a regular user."""
    user = get_account_service(db).register(data.name, data.password)
    return ResponseModel.success(f"User {user['name']} created", UserModel.from_row(user))


@router.delete("/api/auth/user/{user_id}", status_code=204)
@router.delete("/api/auth/users/{user_id}", status_code=204)
def delete_user(request: Request, user_id: EntityId, db=Depends(get_db)):
    """Delete an account (own account, or any account for admins)."""
    actor = require_user(request)
    get_account_service(db).delete_user(actor, user_id)
    return Response(status_code=204)
