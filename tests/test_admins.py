"""
Testes de administradores e permissões (/api/v1/admins)
"""
from uuid import uuid4
from app.models.admin import AdminPermission, UserRole
from app.services import admin_service

API = "/api/v1/admins"


def test_list_admins_includes_current(client, admin_id):
    data = client.get(API).json()

    assert [a["user_id"] for a in data] == [str(admin_id)]
    assert data[0]["can_validate_receipts"] is True
    assert data[0]["role"] == "admin"


def test_missing_permission_row_defaults_to_validator(db_session):
    user_id = uuid4()
    db_session.add(UserRole(user_id=user_id, role="admin"))
    db_session.commit()

    assert admin_service.can_validate_receipts(db_session, user_id) is True
    assert admin_service.list_admins(db_session)[0]["can_validate_receipts"] is True


def test_add_admin_records_creator(client, db_session, admin_id):
    new_admin = uuid4()

    response = client.post(API, json={"user_id": str(new_admin), "can_validate_receipts": False})

    assert response.status_code == 201
    data = response.json()
    assert data["created_by"] == str(admin_id)
    assert data["can_validate_receipts"] is False
    assert admin_service.is_admin(db_session, new_admin)


def test_add_existing_admin_conflicts(client, admin_id):
    response = client.post(API, json={"user_id": str(admin_id)})
    assert response.status_code == 409


def test_update_permission(client, db_session):
    other = uuid4()
    admin_service.add_admin(db_session, other)

    response = client.patch(f"{API}/{other}", json={"can_validate_receipts": False})

    assert response.status_code == 200
    assert response.json()["can_validate_receipts"] is False
    assert admin_service.can_validate_receipts(db_session, other) is False


def test_update_unknown_admin(client):
    assert client.patch(f"{API}/{uuid4()}", json={"can_validate_receipts": True}).status_code == 404


def test_remove_admin_deletes_role_and_permission(client, db_session):
    other = uuid4()
    admin_service.add_admin(db_session, other)

    assert client.delete(f"{API}/{other}").status_code == 204
    assert not admin_service.is_admin(db_session, other)
    assert db_session.query(AdminPermission).filter_by(user_id=other).count() == 0


def test_cannot_remove_self(client, admin_id):
    assert client.delete(f"{API}/{admin_id}").status_code == 400


def test_non_admin_forbidden(client, login):
    login(uuid4())
    assert client.get(API).status_code == 403
    assert client.post(API, json={"user_id": str(uuid4())}).status_code == 403
