"""

관리자 회비 납부 내역 CSV export 테스트.
- ADMIN 접근, semester 필터, CSV 헤더/데이터 행 포함,
  Content-Disposition(attachment) 및 BOM(utf-8-sig) 처리 확인.

"""

import csv
import io
from decimal import Decimal

from rush_bff.models.user import Role
from tests.helpers import headers_for, make_user


def _parse_csv_text(text: str) -> list[list[str]]:
    # Excel 호환을 위해 서버가 BOM 을 먼저 보내므로 제거
    text = text.lstrip("\ufeff")
    f = io.StringIO(text)
    return list(csv.reader(f))


def _create_payment(client, admin, member, **overrides):
    payload = {
        "user_id": str(member.id),
        "amount": "150.00",
        "payment_type": "SEMESTER",
        "due_date": "2025-10-01",
        "semester": "Fall 2025",
    }
    payload.update(overrides)
    r = client.post("/admin/dues/payments", headers=headers_for(admin), json=payload)
    assert r.status_code == 201, r.text
    return r.json()


def test_admin_dues_export_csv_ok(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.ACTIVE, full_name="Pat Member")

    payment = _create_payment(client, admin, member)
    _create_payment(client, admin, member, semester="Spring 2026", due_date="2026-02-01")

    # 납부 처리
    r = client.post(
        f"/admin/dues/payments/{payment['id']}/mark-paid",
        headers=headers_for(admin),
        json={"paid_at": "2025-09-28T12:00:00Z", "payment_method": "VENMO", "reference_number": "VEN-1"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "PAID"

    res = client.get("/admin/dues/export?semester=Fall 2025", headers=headers_for(admin))
    assert res.status_code == 200, res.text
    assert res.headers.get("content-type", "").startswith("text/csv")
    cd = res.headers.get("content-disposition", "")
    assert "attachment" in cd
    assert "Fall_2025" in cd  # 파일명에 semester 포함
    assert res.content.startswith(b"\xef\xbb\xbf")

    rows = _parse_csv_text(res.text)
    assert rows[0] == [
        "semester",
        "payment_id",
        "email",
        "full_name",
        "payment_type",
        "status",
        "amount",
        "due_date",
        "paid_at",
        "payment_method",
        "reference_number",
    ]

    data_rows = rows[1:]
    assert len(data_rows) == 1
    row = data_rows[0]
    assert row[0] == "Fall 2025"
    assert row[1] == payment["id"]
    assert row[2] == member.email
    assert row[3] == "Pat Member"
    assert row[5] == "PAID"
    assert Decimal(row[6]) == Decimal("150")
    assert row[7] == "2025-10-01"
    assert row[8].startswith("2025-09-28")
    assert row[9] == "VENMO"
    assert row[10] == "VEN-1"


def test_admin_dues_export_csv_all_semesters(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.ACTIVE)
    _create_payment(client, admin, member)
    _create_payment(client, admin, member, semester=None)

    res = client.get("/admin/dues/export", headers=headers_for(admin))
    assert res.status_code == 200, res.text
    assert "dues_payments_all.csv" in res.headers.get("content-disposition", "")

    rows = _parse_csv_text(res.text)
    assert len(rows) == 3
    assert sorted(r[0] for r in rows[1:]) == ["", "Fall 2025"]


def test_member_cannot_export(client, db):
    member = make_user(db, role=Role.ACTIVE)

    res = client.get("/admin/dues/export", headers=headers_for(member))
    assert res.status_code == 403
