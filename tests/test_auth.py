"""Login, registration and access management."""

import pytest

from managers import auth_manager
from utils import db
from utils.errors import Forbidden, NotFound, ValidationFailed


def test_default_admin_login():
    user = auth_manager.login("admin", "password")
    assert user.role == "ADMIN"
    assert auth_manager.login("admin", "wrong") is None
    assert auth_manager.login("ghost", "password") is None


def test_session_lands_on_role_home():
    session, view = auth_manager.open_session(auth_manager.login("admin", "password"))
    assert view == "DASHBOARD"
    assert auth_manager.current_user(session.session_id).id == "admin"

    auth_manager.close_session(session.session_id)
    assert auth_manager.current_user(session.session_id) is None


def test_register_customer_derives_id_from_phone():
    user = auth_manager.register_customer("Maya", "9841001234", "secret")
    assert user.id == "CUST-1234"
    assert user.role == "CUSTOMER"
    assert auth_manager.login("CUST-1234", "secret").name == "Maya"
    _, view = auth_manager.open_session(user)
    assert view == "CUSTOMER_VIEW"


def test_register_requires_all_fields():
    with pytest.raises(ValidationFailed):
        auth_manager.register_customer("Maya", "", "secret")


def test_waiter_access_lifecycle():
    auth_manager.create_waiter("waiter1", "pw", "Hari")
    assert [u.id for u in auth_manager.list_users()] == ["admin", "waiter1"]
    _, view = auth_manager.open_session(auth_manager.login("waiter1", "pw"))
    assert view == "POS"

    auth_manager.delete_user("waiter1")
    assert auth_manager.login("waiter1", "pw") is None


def test_admin_cannot_be_removed():
    with pytest.raises(Forbidden):
        auth_manager.delete_user("admin")
    assert len(db.get_users()) == 1


def test_remove_unknown_user():
    with pytest.raises(NotFound):
        auth_manager.delete_user("nobody")


def test_waiter_cannot_take_an_existing_id():
    with pytest.raises(ValidationFailed):
        auth_manager.create_waiter("admin", "pw", "Impostor")
    assert [(u.id, u.role) for u in db.get_users()] == [("admin", "ADMIN")]


def test_customers_sharing_phone_suffix_are_rejected():
    auth_manager.register_customer("Maya", "1111001234", "secret")
    with pytest.raises(ValidationFailed):
        auth_manager.register_customer("Nima", "2222001234", "other")

    auth_manager.delete_user("CUST-1234")
    assert [u.id for u in db.get_users()] == ["admin"]
