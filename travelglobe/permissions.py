from typing import Optional

from fastapi import Depends, HTTPException, status

from travelglobe.users import current_users, oauth2_scheme, optional_oauth2_scheme, roles_permissions


def find_user(token: Optional[str]):
    if not token:
        return None
    for user in current_users():
        if user["password"] == token:  # the admin password doubles as the bearer token
            return user
    return None


def get_current_user(token: str = Depends(oauth2_scheme)):
    user = find_user(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(token: Optional[str] = Depends(optional_oauth2_scheme)):
    return find_user(token)


def has_permission(permission: str):
    def _has_permission(current_user: dict = Depends(get_current_user)):
        for role in current_user["roles"]:
            if permission in roles_permissions.get(role, []):
                return True
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )

    return _has_permission
