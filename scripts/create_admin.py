"""

ADMIN 초기 계정 생성 스크립트.

- 서버 최초 세팅 시 단 한 번 실행하는 용도
- .env에 정의된 ADMIN_* 환경 변수를 읽어
  ADMIN 계정을 생성한다.
- 이미 활성 ADMIN 계정이 존재하면 생성하지 않고 종료한다.

사용 목적:
- 권한 변경 / 이벤트 / 투표 라운드 관리 API에 접근할 수 있는
  첫 관리자 계정을 안전하게 초기화하기 위함
- 외부 인증 서비스에서 먼저 계정을 만들고,
  그 계정 ID(sub)를 ADMIN_AUTH_ID 로 지정한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_admin

"""

import os
from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import or_, select
from rush_bff.db.session import SessionLocal
from rush_bff.models.user import User, Role
from rush_bff.services.users import count_admins, normalize_email


def main():
    db = SessionLocal()
    try:
        if count_admins(db) > 0:
            print("✅ ADMIN already exists. Skip creation.")
            return

        auth_id = os.environ["ADMIN_AUTH_ID"]
        email = normalize_email(os.environ["ADMIN_EMAIL"])
        full_name = os.environ.get("ADMIN_FULL_NAME", "Admin")

        existing = db.scalar(
            select(User).where(or_(User.email == email, User.auth_id == auth_id))
        )
        if existing:
            raise RuntimeError("Email or auth id already exists but is not ADMIN")

        user = User(
            auth_id=auth_id,
            email=email,
            full_name=full_name,
            role=Role.ADMIN,
            is_active=True,
        )

        db.add(user)
        db.commit()

        print(f"🚀 ADMIN created: {email}")

    finally:
        db.close()


if __name__ == "__main__":
    main()
