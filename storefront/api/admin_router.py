from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field

from storefront.api.dependencies import get_admin_auth
from storefront.auth.admin import AdminAuth

router = APIRouter()


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_password: Optional[str] = Field(default=None, alias="newPassword")


# Any body shape is accepted: a password that is missing, not a string or not
# in an object is simply a failed login (401), never a malformed request.
@router.post("/login", tags=["Admin"])
async def admin_login(payload: Any = Body(default=None), auth: AdminAuth = Depends(get_admin_auth)):
    password = payload.get("password") if isinstance(payload, dict) else None
    auth.login(password)
    return {"success": True}


# No server-side gate: the admin UI triggers this directly.
@router.post("/reset-password", tags=["Admin"])
async def admin_reset_password(body: Optional[ResetPasswordRequest] = None, auth: AdminAuth = Depends(get_admin_auth)):
    auth.reset_password(body.new_password if body else None)
    return {"success": True}
