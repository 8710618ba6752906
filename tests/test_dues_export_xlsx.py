"""

관리자 회비 납부 내역 Excel(xlsx) export 테스트.
- openpyxl 로 응답 바이너리를 다시 열어 시트 / 헤더 / 행 확인

"""

import io

from openpyxl import load_workbook

from rush_bff.models.user import Role
from tests.helpers import headers_for, make_user


def test_admin_dues_export_xlsx_ok(client, db):
    admin = make_user(db, role=Role.ADMIN)
    member = make_user(db, role=Role.PLEDGE)

    r = client.post(
        "/admin/dues/payments",
        headers=headers_for(admin),
        json={
            "user_id": str(member.id),
            "amount": "75.50",
            "payment_type": "INITIATION",
            "due_date": "2025-11-15",
            "semester": "Fall 2025",
        },
    )
    assert r.status_code == 201, r.text

    res = client.get("/admin/dues/export.xlsx?semester=Fall 2025", headers=headers_for(admin))
    assert res.status_code == 200, res.text
    assert res.headers.get("content-type", "").startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "dues_payments_Fall_2025.xlsx" in res.headers.get("content-disposition", "")

    wb = load_workbook(io.BytesIO(res.content))
    ws = wb["dues_payments"]
    rows = list(ws.iter_rows(values_only=True))

    assert rows[0][:3] == ("semester", "payment_id", "email")
    assert len(rows) == 2
    assert rows[1][0] == "Fall 2025"
    assert rows[1][2] == member.email
    assert rows[1][4] == "INITIATION"
    assert rows[1][5] == "NOT_PAID"
