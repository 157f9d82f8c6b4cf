from __future__ import annotations
import hashlib
import json
from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from painel_metas.core.config import settings

# ---------------------------------------------------------------------------
# ETag a partir do corpo serializado de forma determinística
# ---------------------------------------------------------------------------

def canonical_json(obj: Any) -> bytes:
    """Mesmo conteúdo -> mesmos bytes (chaves ordenadas, sem espaços)."""
    return json.dumps(
        jsonable_encoder(obj),
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
    ).encode("utf-8")


def compute_etag(body: bytes) -> str:
    return '"%s"' % hashlib.sha256(body).hexdigest()[:32]


def _matches(if_none_match: Optional[str], etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = {tag.strip().removeprefix("W/") for tag in if_none_match.split(",")}
    return "*" in candidates or etag in candidates

# ---------------------------------------------------------------------------
# Resposta JSON com ETag (+ 304 quando o cliente já tem a versão)
# ---------------------------------------------------------------------------

def etag_json(
    request: Request,
    payload: Any,
    *,
    max_age: Optional[int] = None,
    swr: Optional[int] = None,
) -> Response:
    body = canonical_json(payload)
    etag = compute_etag(body)
    headers = {
        "ETag": etag,
        "Cache-Control": "private, max-age=%d, stale-while-revalidate=%d" % (
            settings.CACHE_MAX_AGE if max_age is None else max_age,
            settings.CACHE_SWR if swr is None else swr,
        ),
        # conteúdo depende do usuário (loja do token)
        "Vary": "Authorization",
    }

    if _matches(request.headers.get("If-None-Match"), etag):
        return Response(status_code=304, headers=headers)
    return Response(content=body, media_type=JSONResponse.media_type, headers=headers)
