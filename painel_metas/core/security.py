from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Literal, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel, Field, ValidationError
from painel_metas.core.config import settings

# -----------------------------------------------------------------------------
# 1) Claims do token de acesso
# -----------------------------------------------------------------------------
# O login e a sessão ficam no serviço de autenticação; aqui só validamos o
# token e extraímos papel e loja do usuário.

TokenType = Literal["access"]

# Papéis que podem consultar qualquer loja
STORE_WIDE_ROLES = frozenset({"admin", "manager"})


class AccessClaims(BaseModel):
    sub: str
    type: TokenType = "access"
    exp: int
    roles: List[str] = Field(default_factory=list)
    store_id: Optional[int] = None

    def can_access_store(self, store_id: int) -> bool:
        roles = {r.lower() for r in self.roles}
        if not roles.isdisjoint(STORE_WIDE_ROLES):
            return True
        return self.store_id == store_id

# -----------------------------------------------------------------------------
# 2) Helpers internos para emitir e decodificar JWT
# -----------------------------------------------------------------------------

bearer_scheme = HTTPBearer(auto_error=True)

def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)

def _exp_in(minutes: int) -> int:
    return int((_utcnow() + timedelta(minutes=minutes)).timestamp())

def _decode(token: str, secret: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido ou expirado.",
        )

# -----------------------------------------------------------------------------
# 3) Emissão (usada por ferramentas internas e testes) e decodificação
# -----------------------------------------------------------------------------

def create_access_token(
    *,
    user_id: str,
    roles: List[str],
    store_id: Optional[int] = None,
    minutes: Optional[int] = None,
) -> str:
    claims = AccessClaims(
        sub=user_id,
        exp=_exp_in(settings.ACCESS_TOKEN_MINUTES if minutes is None else minutes),
        roles=roles,
        store_id=store_id,
    )
    return jwt.encode(claims.model_dump(), settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_access_token(token: str) -> AccessClaims:
    data = _decode(token, settings.JWT_SECRET)
    try:
        return AccessClaims(**data)
    except ValidationError:
        raise HTTPException(status_code=401, detail="Token de acesso inválido.")

# -----------------------------------------------------------------------------
# 4) Dependências do FastAPI para autenticação/autorização
# -----------------------------------------------------------------------------

def get_current_access(creds: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> AccessClaims:
    return decode_access_token(creds.credentials)

def require_roles(*allowed_roles: str):
    def _dep(claims: AccessClaims = Depends(get_current_access)) -> AccessClaims:
        roles = set(map(str.lower, claims.roles or []))
        allowed = set(map(str.lower, allowed_roles))
        if roles.isdisjoint(allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Permissão negada.",
            )
        return claims
    return _dep
