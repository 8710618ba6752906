"""

회비 API 통합 테스트.
- 회원 본인 납부 내역 조회 (outstanding_only 필터)
- 면제 / 연체 일괄 처리, 이미 PAID 인 레코드 재처리 409

"""

from datetime import date, timedelta

from rush_bff.models.user import Role
from tests.helpers import headers_for, make_user


def _create(client, admin, member, **overrides):
    payload = {
        "user_id": str(member.id),
        "amount": "100.00",
        "payment_type": "SEMESTER",
        "due_date": "2025-10-01",
        "semester": "Fall 2025",
    }
    payload.update(overrides)
    r = client.post("/admin/dues/payments", headers=headers_for(admin), json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_member_sees_own_payments(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.ACTIVE)
    other = make_user(db, role=Role.ACTIVE)

    paid = _create(client, admin, member, status="PAID", payment_method="CASH")
    open_payment = _create(client, admin, member, payment_type="SOCIAL")
    _create(client, admin, other)

    assert paid["paid_at"] is not None

    r = client.get("/dues/me", headers=headers_for(member))
    assert r.status_code == 200, r.text
    assert {row["id"] for row in r.json()} == {paid["id"], open_payment["id"]}

    r = client.get("/dues/me?outstanding_only=true", headers=headers_for(member))
    assert r.status_code == 200, r.text
    assert [row["id"] for row in r.json()] == [open_payment["id"]]


def test_waive_and_mark_overdue(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.PLEDGE)
    past_due = (date.today() - timedelta(days=30)).isoformat()

    fine = _create(client, admin, member, payment_type="FINE", due_date=past_due)
    late = _create(client, admin, member, due_date=past_due)

    r = client.post(f"/admin/dues/payments/{fine['id']}/waive", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "WAIVED"

    r = client.post(f"/admin/dues/payments/{fine['id']}/mark-paid", headers=headers_for(admin), json={})
    assert r.status_code == 409, r.text
    assert r.json()["error"] == {"kind": "invalid_state", "field": "status"}

    r = client.post("/admin/dues/mark-overdue", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert r.json() == {"updated": 1}

    r = client.get("/admin/dues/outstanding", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert [(row["id"], row["status"]) for row in r.json()] == [(late["id"], "OVERDUE")]

    r = client.get(f"/admin/dues/users/{member.id}/payments", headers=headers_for(admin))
    assert r.status_code == 200, r.text
    assert len(r.json()) == 2


def test_negative_amount_is_rejected(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.ACTIVE)

    r = client.post(
        "/admin/dues/payments",
        headers=headers_for(admin),
        json={"user_id": str(member.id), "amount": "-5", "payment_type": "FINE", "due_date": "2025-10-01"},
    )
    assert r.status_code == 400, r.text
    assert r.json()["error"]["field"] == "amount"
