from fastapi import Depends, HTTPException
from app.config import settings
from app.models.user import User
from app.utils.token import get_current_user


def is_admin(user: User) -> bool:
    if user.role == "admin":
        return True

    admin_email = (settings.admin_email or "").strip().lower()
    return bool(admin_email) and user.email.strip().lower() == admin_email


def require_admin(current_user: User = Depends(get_current_user)):
    if not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
