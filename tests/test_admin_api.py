"""

관리자 API 통합 테스트.
- 권한 / 단계 변경, 비활성화 후 접근 차단
- 관리자 행위 로그 조회 (최신순, 행위자 / 대상 정보 포함)
- 도메인 오류 → HTTP 상태 코드 변환

"""

from rush_bff.models.user import Role
from tests.helpers import headers_for, make_user


def test_admin_routes_require_admin(client, db):
    active = make_user(db, role=Role.ACTIVE)

    r = client.get("/admin/users", headers=headers_for(active))
    assert r.status_code == 403, r.text

    r = client.get("/admin/logs", headers=headers_for(active))
    assert r.status_code == 403, r.text


def test_promote_rushee_and_read_logs(client, db):
    admin = make_user(db, role=Role.ADMIN)
    rushee = make_user(db, role=Role.RUSHEE)

    r = client.patch(f"/admin/users/{rushee.id}/stage", headers=headers_for(admin), json={"candidate_stage": "FIRST_ROUND"})
    assert r.status_code == 200, r.text
    assert r.json()["candidate_stage"] == "FIRST_ROUND"

    r = client.patch(f"/admin/users/{rushee.id}/role", headers=headers_for(admin), json={"role": "PLEDGE"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["role"] == "PLEDGE"
    # 리크루팅 결과로 마지막 단계 보존
    assert body["candidate_stage"] == "FIRST_ROUND"

    r = client.get("/admin/logs?limit=500", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    page = r.json()
    assert page["limit"] == 200
    actions = {entry["action"] for entry in page["data"]}
    assert actions == {"SET_STAGE", "SET_ROLE"}
    for entry in page["data"]:
        assert entry["actor"]["id"] == str(admin.id)
        assert entry["target"]["id"] == str(rushee.id)


def test_stage_change_for_member_is_validation_error(client, db):
    admin = make_user(db, role=Role.ADMIN)
    active = make_user(db, role=Role.ACTIVE)

    r = client.patch(f"/admin/users/{active.id}/stage", headers=headers_for(admin), json={"candidate_stage": "NO_BID"})
    assert r.status_code == 400, r.text
    assert r.json()["error"] == {"kind": "validation_error", "field": "candidate_stage"}


def test_self_role_change_is_invalid_state(client, db):
    admin = make_user(db, role=Role.ADMIN)

    r = client.patch(f"/admin/users/{admin.id}/role", headers=headers_for(admin), json={"role": "ACTIVE"})
    assert r.status_code == 409, r.text
    assert r.json()["error"]["kind"] == "invalid_state"


def test_unknown_user_is_not_found(client, db):
    admin = make_user(db, role=Role.ADMIN)

    r = client.post(
        "/admin/users/00000000-0000-0000-0000-000000000000/deactivate",
        headers=headers_for(admin),
    )
    assert r.status_code == 404, r.text
    assert r.json()["error"]["kind"] == "not_found"


def test_deactivated_member_loses_access(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.ACTIVE)

    r = client.post(f"/admin/users/{member.id}/deactivate", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert r.json()["is_active"] is False

    r = client.get("/users/me", headers=headers_for(member))
    assert r.status_code == 403, r.text

    r = client.get("/admin/users?include_inactive=true", headers=headers_for(admin))
    assert str(member.id) in {row["id"] for row in r.json()}

    r = client.post(f"/admin/users/{member.id}/reactivate", headers=headers_for(admin))
    assert r.status_code == 200, r.text

    r = client.get("/users/me", headers=headers_for(member))
    assert r.status_code == 200, r.text
