"""

리크루팅 시즌 통합 테스트 (이벤트 → 출석 → 투표 → 피드백 → 인터뷰).
- 첫 투표 201, 열린 라운드 재투표 200 (같은 ballot 수정)
- 라운드 종료 후 재투표 409 (already voted)
- 집계 결과에 투표자 정보 없음
- 출석 중복 생성 409 → PUT 으로 수정
- rating=7 피드백 400, PLEDGE 면접관 403

"""

from rush_bff.models.user import Role
from tests.helpers import headers_for, make_user


def _setup(client, db):
    admin = make_user(db, role=Role.ADMIN)
    active = make_user(db, role=Role.ACTIVE)
    pledge = make_user(db, role=Role.PLEDGE)
    rushee = make_user(db, role=Role.RUSHEE)

    r = client.post(
        "/events",
        headers=headers_for(admin),
        json={
            "title": "Fall Smoker",
            "event_type": "SMOKER",
            "start_time": "2025-09-01T18:00:00Z",
            "end_time": "2025-09-01T20:00:00Z",
            "is_voting_event": True,
        },
    )
    assert r.status_code == 201, r.text
    event_id = r.json()["id"]

    return {"admin": admin, "active": active, "pledge": pledge, "rushee": rushee, "event_id": event_id}


def test_ballot_lifecycle(client, db):
    ctx = _setup(client, db)
    admin, active, rushee = ctx["admin"], ctx["active"], ctx["rushee"]

    r = client.post("/votes/rounds", headers=headers_for(admin), json={"name": "Round 1", "event_id": ctx["event_id"]})
    assert r.status_code == 201, r.text
    round_id = r.json()["id"]
    assert r.json()["status"] == "OPEN"

    ballot = {"candidate_id": str(rushee.id), "round": "Round 1", "vote_type": "BID", "vote_value": 8}
    r = client.post("/votes", headers=headers_for(active), json=ballot)
    assert r.status_code == 201, r.text
    first = r.json()
    assert first["created"] is True
    assert first["ballot"]["event_id"] == ctx["event_id"]

    # 열린 라운드에서 재투표 → 같은 ballot 수정
    r = client.post("/votes", headers=headers_for(active), json={**ballot, "vote_type": "NO_BID", "vote_value": 2})
    assert r.status_code == 200, r.text
    assert r.json()["created"] is False
    assert r.json()["ballot"]["id"] == first["ballot"]["id"]
    assert r.json()["ballot"]["vote_type"] == "NO_BID"

    r = client.get("/votes/me", headers=headers_for(active))
    assert r.status_code == 200, r.text
    assert len(r.json()) == 1

    r = client.post(f"/votes/rounds/{round_id}/close", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "CLOSED"

    r = client.post("/votes", headers=headers_for(active), json=ballot)
    assert r.status_code == 409, r.text
    assert r.json()["detail"] == "already voted"

    r = client.get(f"/votes/events/{ctx['event_id']}/results", headers=headers_for(active))
    assert r.status_code == 200, r.text
    [tally] = r.json()
    assert tally["no_bid"] == 1
    assert tally["total"] == 1
    assert not any("voter" in key for key in tally)


def test_pledge_cannot_vote_or_see_results(client, db):
    ctx = _setup(client, db)
    client.post("/votes/rounds", headers=headers_for(ctx["admin"]), json={"name": "Round 1"})

    ballot = {"candidate_id": str(ctx["rushee"].id), "round": "Round 1", "vote_type": "BID"}
    r = client.post("/votes", headers=headers_for(ctx["pledge"]), json=ballot)
    assert r.status_code == 403, r.text

    r = client.get("/votes/results", headers=headers_for(ctx["pledge"]))
    assert r.status_code == 403, r.text


def test_vote_value_out_of_range(client, db):
    ctx = _setup(client, db)
    client.post("/votes/rounds", headers=headers_for(ctx["admin"]), json={"name": "Round 1"})

    ballot = {"candidate_id": str(ctx["rushee"].id), "round": "Round 1", "vote_type": "BID", "vote_value": 0}
    r = client.post("/votes", headers=headers_for(ctx["active"]), json=ballot)
    assert r.status_code == 400, r.text
    assert r.json()["error"] == {"kind": "validation_error", "field": "vote_value"}


def test_attendance_conflict_then_update(client, db):
    ctx = _setup(client, db)
    admin, rushee, event_id = ctx["admin"], ctx["rushee"], ctx["event_id"]

    r = client.post(
        f"/attendance/events/{event_id}", headers=headers_for(admin), json={"user_id": str(rushee.id), "status": "PRESENT"}
    )
    assert r.status_code == 201, r.text

    r = client.post(
        f"/attendance/events/{event_id}", headers=headers_for(admin), json={"user_id": str(rushee.id), "status": "LATE"}
    )
    assert r.status_code == 409, r.text
    assert r.json()["error"]["kind"] == "conflict"

    r = client.put(f"/attendance/events/{event_id}/users/{rushee.id}", headers=headers_for(admin), json={"status": "LATE"})
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "LATE"

    r = client.get("/attendance/me", headers=headers_for(rushee))
    assert r.status_code == 200, r.text
    assert [row["status"] for row in r.json()] == ["LATE"]


def test_feedback_rating_out_of_range(client, db):
    ctx = _setup(client, db)

    r = client.post(
        "/feedback", headers=headers_for(ctx["pledge"]), json={"candidate_id": str(ctx["rushee"].id), "rating": 7}
    )
    assert r.status_code == 400, r.text
    assert r.json()["error"] == {"kind": "validation_error", "field": "rating"}

    r = client.get(f"/feedback/candidates/{ctx['rushee'].id}", headers=headers_for(ctx["admin"]))
    assert r.status_code == 200, r.text
    assert r.json() == []


def test_pledge_cannot_record_interview(client, db):
    ctx = _setup(client, db)

    payload = {
        "candidate_id": str(ctx["rushee"].id),
        "questions_and_answers": [{"question": "Why us?", "answer": "Brotherhood"}],
        "overall_rating": 4,
    }
    r = client.post("/interviews", headers=headers_for(ctx["pledge"]), json=payload)
    assert r.status_code == 403, r.text
    assert r.json()["error"]["kind"] == "authorization_error"

    r = client.post("/interviews", headers=headers_for(ctx["active"]), json=payload)
    assert r.status_code == 201, r.text
    assert r.json()["questions_and_answers"] == payload["questions_and_answers"]
