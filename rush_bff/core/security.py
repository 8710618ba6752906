"""
security.py

외부 인증 서비스가 발급한 JWT access token 검증 유틸리티.

이 서버는 토큰을 발급하지 않는다.
로그인 / 재발급은 외부 인증 서비스의 책임이며,
여기서는 서명 / 만료 / audience 만 확인하고 claims 를 돌려준다.

주요 claims:
- sub   : 외부 인증 계정 ID (users.auth_id 와 매칭)
- email : 가입 시 사용자 email 로 복사
- aud   : AUTH_JWT_AUDIENCE (기본 "authenticated")

관련 파일:
- rush_bff.core.config : 시크릿 / 알고리즘 / audience 설정
- rush_bff.core.deps   : 토큰을 실제로 검증하는 인증 의존성

"""

from jose import JWTError, jwt

from rush_bff.core.config import settings


"""
Access Token 디코딩 및 검증 함수

- 서명 / 만료(exp) 검증
- AUTH_JWT_AUDIENCE 가 설정되어 있으면 aud 도 검증
- sub 가 없으면 JWTError 발생

"""
def decode_access_token(token: str) -> dict:
    audience = settings.AUTH_JWT_AUDIENCE
    claims = jwt.decode(
        token,
        settings.AUTH_JWT_SECRET,
        algorithms=[settings.AUTH_JWT_ALGORITHM],
        audience=audience,
        options={"verify_aud": audience is not None},
    )
    if not claims.get("sub"):
        raise JWTError("Token has no subject")
    return claims
