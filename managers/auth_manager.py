# managers/auth_manager.py
from typing import Optional, Tuple
import uuid

from app.logging_hooks import login_logger
from models import AuthUser
from state import SessionModel
from utils import db
from utils.errors import ValidationFailed, NotFound, Forbidden

# role -> first screen after login
HOME_VIEW = {
    "CUSTOMER": "CUSTOMER_VIEW",
    "WAITER": "POS",
    "ADMIN": "DASHBOARD",
}


def login(user_id: str, password: str) -> Optional[AuthUser]:
    """Plain-text credential check; re-reads the user list on every attempt."""
    user = next((u for u in db.get_users() if u.id == user_id and u.password == password), None)
    login_logger(user_id, user is not None, user.role if user else None)
    return user


def open_session(user: AuthUser) -> Tuple[SessionModel, str]:
    session = SessionModel(session_id=uuid.uuid4().hex, user_id=user.id)
    db.save_session(session)
    return session, HOME_VIEW.get(user.role, "DASHBOARD")


def close_session(session_id: str) -> None:
    db.delete_session(session_id)


def current_user(session_id: str) -> Optional[AuthUser]:
    session = db.load_session(session_id)
    if session is None:
        return None
    return next((u for u in db.get_users() if u.id == session.user_id), None)


def _ensure_free(user_id: str) -> None:
    if any(u.id == user_id for u in db.get_users()):
        raise ValidationFailed(f"User ID {user_id} is already taken")


def register_customer(name: str, phone: str, password: str) -> AuthUser:
    if not name or not phone or not password:
        raise ValidationFailed("Name, phone and password are required")
    user_id = f"CUST-{phone[-4:]}"
    _ensure_free(user_id)
    user = AuthUser(id=user_id, password=password, name=name, role="CUSTOMER")
    db.add_user(user)
    return user


def create_waiter(user_id: str, password: str, name: str) -> AuthUser:
    if not user_id or not password or not name:
        raise ValidationFailed("ID, password and name are required")
    _ensure_free(user_id)
    user = AuthUser(id=user_id, password=password, name=name, role="WAITER")
    db.add_user(user)
    return user


def list_users():
    return db.get_users()


def delete_user(user_id: str) -> None:
    users = db.get_users()
    target = next((u for u in users if u.id == user_id), None)
    if target is None:
        raise NotFound(f"user {user_id} not found")
    if target.role == "ADMIN":
        raise Forbidden("Admin access cannot be removed")
    db.save_users([u for u in users if u.id != user_id])
