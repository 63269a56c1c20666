import aiohttp
from typing import Any, Dict, Optional

from inspection_api.core import database
from inspection_api.core.clock import now_iso
from inspection_api.core.config import settings
from inspection_api.core.errors import AuthenticationError, ConflictError, DataAccessError
from inspection_api.core.logger import get_logger
from inspection_api.core.session import SessionContext
from inspection_api.models.auth import LoginResponse, RegisterResponse

logger = get_logger("auth_service")

DEFAULT_LOGIN_ROLE = "technician"
REGISTERED_ROLE = "admin"
CONFLICT_CODES = ("EMAIL_EXISTS",)

# -------------------------------------------------------------------
# Identity REST helper
# -------------------------------------------------------------------
async def identity_request(action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    url = f"{settings.IDENTITY_BASE_URL}/accounts:{action}"
    logger.info(f"Identity request accounts:{action}")

    async with aiohttp.ClientSession() as session:
        async with session.post(url, params={"key": settings.IDENTITY_API_KEY}, json=payload) as res:
            text = await res.text()
            try:
                body = await res.json(content_type=None)
            except ValueError:
                body = {}
            body = body if isinstance(body, dict) else {}

            if res.status < 400:
                return body

            message = (body.get("error") or {}).get("message") or text
            logger.error(f"Identity error {res.status} on accounts:{action}: {message}")
            if any(message.startswith(code) for code in CONFLICT_CODES):
                raise ConflictError(message)
            if res.status in (400, 401, 403):
                raise AuthenticationError(message)
            raise DataAccessError(f"Identity service error {res.status}: {message}")


async def sign_in(email: str, password: str) -> Dict[str, Any]:
    return await identity_request(
        "signInWithPassword", {"email": email, "password": password, "returnSecureToken": True}
    )


async def sign_up(email: str, password: str) -> Dict[str, Any]:
    return await identity_request(
        "signUp", {"email": email, "password": password, "returnSecureToken": True}
    )


async def lookup_account(token: str) -> Optional[Dict[str, Any]]:
    data = await identity_request("lookup", {"idToken": token})
    users = data.get("users") or []
    return users[0] if users else None

# -------------------------------------------------------------------
# Login / register
# -------------------------------------------------------------------
async def login(email: str, password: str) -> LoginResponse:
    """
    Sign in, then read role and display name from the user's profile.
    A missing profile is created on the spot; profile trouble never blocks the login.
    """
    account = await sign_in(email, password)
    user_id = account["localId"]
    user_email = account.get("email") or email

    role = DEFAULT_LOGIN_ROLE
    name = user_email or "User"
    users = database.get_store("users")

    try:
        profile = await users.get(user_id)
        if profile:
            role = profile.get("role") or role
            name = profile.get("name") or name
        else:
            logger.warning(f"User profile missing for {user_id}. Attempting to auto-create.")
            try:
                await users.set(user_id, {
                    "email": user_email,
                    "name": name,
                    "role": role,
                    "created_at": now_iso(),
                    "disabled": False,
                })
                logger.info(f"User profile auto-created for {user_id}")
            except DataAccessError as e:
                logger.error(f"Failed to auto-create user profile for {user_id}: {e}")
    except DataAccessError as e:
        logger.warning(f"Could not fetch user profile for {user_id}: {e}")

    return LoginResponse(
        token=account["idToken"],
        email=user_email,
        name=name,
        role=role,
        user_id=user_id,
    )


async def register(email: str, password: str, name: str, pin: str) -> RegisterResponse:
    account = await sign_up(email, password)
    user_id = account["localId"]

    await database.get_store("users").set(user_id, {
        "name": name,
        "email": email,
        "pin": pin,
        "role": REGISTERED_ROLE,
        "created_at": now_iso(),
        "disabled": False,
    })
    logger.info(f"Registered user {user_id} ({email})")
    return RegisterResponse(user_id=user_id, email=email, name=name, role=REGISTERED_ROLE)

# -------------------------------------------------------------------
# Session resolution
# -------------------------------------------------------------------
async def resolve_session(session: SessionContext) -> SessionContext:
    user = None
    profile = None

    if session.token:
        try:
            user = await lookup_account(session.token)
        except AuthenticationError as e:
            logger.info(f"Rejected session token: {e}")

        if user:
            try:
                profile = await database.get_store("users").get(user["localId"])
            except DataAccessError as e:
                logger.error(f"Error fetching user profile for {user['localId']}: {e}")

    session.initialize(user, profile)
    return session
