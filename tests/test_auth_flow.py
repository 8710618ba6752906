"""

외부 인증 토큰 기반 가입 / 본인 조회 통합 테스트.
- 토큰 없음 / 위조 / 만료 / audience 불일치 → 401
- 가입하지 않은 토큰 → 401 (User not found)
- 가입 후 RUSHEE / INITIAL, 중복 가입 409
- 비활성 사용자 → 403

"""

from rush_bff.models.user import Role
from tests.helpers import auth_header, headers_for, make_token, make_user


def test_me_requires_token(client):
    r = client.get("/users/me")
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "Not authenticated"


def test_invalid_tokens_are_rejected(client):
    r = client.get("/users/me", headers=auth_header("not-a-jwt"))
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "Could not validate credentials"

    expired = make_token("auth-expired", email="x@test.com", expires_in=-60)
    r = client.get("/users/me", headers=auth_header(expired))
    assert r.status_code == 401, r.text

    wrong_aud = make_token("auth-aud", email="x@test.com", audience="someone-else")
    r = client.get("/users/me", headers=auth_header(wrong_aud))
    assert r.status_code == 401, r.text


def test_signup_then_me(client):
    token = make_token("auth-new", email="Rushee@Test.com")

    # 가입 전
    r = client.get("/users/me", headers=auth_header(token))
    assert r.status_code == 401, r.text
    assert r.json()["detail"] == "User not found"

    r = client.post("/users/signup", headers=auth_header(token), json={"full_name": "New Rushee"})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["email"] == "rushee@test.com"
    assert body["role"] == "RUSHEE"
    assert body["candidate_stage"] == "INITIAL"

    r = client.get("/users/me", headers=auth_header(token))
    assert r.status_code == 200, r.text
    assert r.json()["id"] == body["id"]

    # 같은 토큰으로 재가입
    r = client.post("/users/signup", headers=auth_header(token), json={})
    assert r.status_code == 409, r.text
    assert r.json()["error"] == {"kind": "conflict", "field": "auth_id"}


def test_signup_requires_email_claim(client):
    token = make_token("auth-no-email")
    r = client.post("/users/signup", headers=auth_header(token), json={})
    assert r.status_code == 400, r.text
    assert r.json()["error"]["kind"] == "validation_error"


def test_update_profile(client, db):
    user = make_user(db, role=Role.PLEDGE)

    r = client.patch("/users/me", headers=headers_for(user), json={"phone": "555-0100"})
    assert r.status_code == 200, r.text
    assert r.json()["phone"] == "555-0100"
    assert r.json()["full_name"] == user.full_name


def test_deactivated_user_is_blocked(client, db):
    user = make_user(db, role=Role.ACTIVE, is_active=False)

    r = client.get("/users/me", headers=headers_for(user))
    assert r.status_code == 403, r.text
    assert r.json()["detail"] == "User is deactivated"


def test_directory_requires_pledge(client, db):
    rushee = make_user(db, role=Role.RUSHEE)
    pledge = make_user(db, role=Role.PLEDGE)
    active = make_user(db, role=Role.ACTIVE)

    r = client.get("/users/directory", headers=headers_for(rushee))
    assert r.status_code == 403, r.text

    r = client.get("/users/directory", headers=headers_for(pledge))
    assert r.status_code == 200, r.text
    ids = {row["id"] for row in r.json()}
    assert ids == {str(pledge.id), str(active.id)}
    assert all(set(row) == {"id", "full_name", "role"} for row in r.json())
