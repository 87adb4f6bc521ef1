import pytest
from fastapi import HTTPException

import recruitment.dependencies as deps


class _Creds:
    def __init__(self, token: str):
        self.credentials = token


class _User:
    def __init__(self, user_id="u1", role="APPLICANT", is_active=True):
        self.id = user_id
        self.role = role
        self.is_active = is_active


def test_get_current_user_missing_credentials():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=None)
    assert ex.value.status_code == 401


def test_get_current_user_invalid_token(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("bad"))
    assert ex.value.status_code == 401


def test_get_current_user_user_not_found(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: "u1")
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: None)
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("tok"))
    assert ex.value.status_code == 401


def test_get_current_user_inactive_user(monkeypatch):
    monkeypatch.setattr(deps, "decode_access_token", lambda token: "u1")
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: _User(is_active=False))
    with pytest.raises(HTTPException) as ex:
        deps.get_current_user(db=object(), credentials=_Creds("tok"))
    assert ex.value.status_code == 401


def test_get_current_user_success(monkeypatch):
    user = _User(user_id="u1")
    monkeypatch.setattr(deps, "decode_access_token", lambda token: "u1")
    monkeypatch.setattr(deps, "get_by_id", lambda db, uid: user)
    assert deps.get_current_user(db=object(), credentials=_Creds("tok")) is user


@pytest.mark.parametrize("role", ["HR", "ADMIN"])
def test_get_current_hr_accepts_staff(role):
    user = _User(role=role)
    assert deps.get_current_hr(user=user) is user


def test_get_current_hr_rejects_applicant():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_hr(user=_User(role="APPLICANT"))
    assert ex.value.status_code == 403


def test_get_current_admin_requires_admin():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_admin(user=_User(role="HR"))
    assert ex.value.status_code == 403
    user = _User(role="ADMIN")
    assert deps.get_current_admin(user=user) is user


def test_get_current_applicant_rejects_staff():
    with pytest.raises(HTTPException) as ex:
        deps.get_current_applicant(user=_User(role="HR"))
    assert ex.value.status_code == 403
    user = _User(role="APPLICANT")
    assert deps.get_current_applicant(user=user) is user
