from fastapi.security import OAuth2PasswordBearer

from travelglobe.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/", auto_error=False)

roles_permissions = {
    "admin": ["write:locations", "write:settings", "write:flights"],
}


def current_users():
    return [
        {"username": settings.ADMIN_USERNAME, "roles": ["admin"], "password": settings.ADMIN_DASHBOARD_PASSWORD},
    ]
