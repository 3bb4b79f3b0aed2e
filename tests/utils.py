# tests/utils.py

from activity_registration_api.app.core.security import ADMIN_ROLE, create_access_token


USER_A = "0b7e6f3c-5d2a-4c1e-9f8b-2a6d4e1c7b90"
USER_B = "9c1d2e3f-4a5b-4c6d-8e7f-0a1b2c3d4e5f"


def auth_headers(user_id, admin=False):
    """Authorization header carrying a freshly signed token for ``user_id``."""
    claims = {"sub": user_id}
    if admin:
        claims["role"] = ADMIN_ROLE
    return {"Authorization": f"Bearer {create_access_token(claims)}"}
