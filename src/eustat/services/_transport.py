"""サービス層向けトランスポート共通処理。

1回の呼び出しにつき1回だけGETを送る。再試行は行わない。
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Literal

import httpx

from eustat.config import RESPONSE_EXCERPT_LENGTH
from eustat.errors import (
    EurostatApiError,
    EurostatBadRequestError,
    EurostatNotFoundError,
    EurostatParseError,
    EurostatServerError,
    EurostatTransportError,
)
from eustat.http import build_request_headers
from eustat.parsers import ApiErrorBody, decode_response_bytes, extract_api_error, load_json

Params = list[tuple[str, str]]
JsonKind = Literal["object", "array"]

_JSON_KINDS: dict[str, type] = {"object": Mapping, "array": list}


def _try_extract_error(text: str) -> ApiErrorBody | None:
    try:
        return extract_api_error(json.loads(text))
    except ValueError:
        return None


def _make_api_error(
    *,
    status: int,
    body: ApiErrorBody | None,
    request_url: str,
    raw_text: str,
    capture_full_response: bool,
) -> EurostatApiError:
    if status == 400:
        klass: type[EurostatApiError] = EurostatBadRequestError
    elif status == 404:
        klass = EurostatNotFoundError
    elif status >= 500:
        klass = EurostatServerError
    else:
        klass = EurostatApiError
    if body is not None and body.label:
        message = body.label
    else:
        message = f"APIがエラーを返しました: status={status}"
    return klass(
        message,
        status=status,
        error_id=body.error_id if body is not None else None,
        request_url=request_url,
        raw_response_excerpt=raw_text[:RESPONSE_EXCERPT_LENGTH],
        raw_response=raw_text if capture_full_response else None,
    )


def handle_response(
    response: httpx.Response,
    *,
    expect: JsonKind,
    capture_full_response: bool,
) -> tuple[Any, str]:
    """レスポンスを検査してJSON本文を返す。

    Args:
        response: HTTPレスポンス。
        expect: 本文の最上位に期待するJSON型。
        capture_full_response: 例外に完全本文を保持するか。

    Returns:
        (JSON本文, 実行URL)。

    Raises:
        EurostatApiError: HTTPステータスが2xx以外、または本文に ``error`` がある場合。
        EurostatParseError: 本文がJSONでない場合、または最上位の型が ``expect`` と異なる場合。
    """

    request_url = str(response.request.url)
    raw_text = decode_response_bytes(response.content)
    status = int(response.status_code)
    if not 200 <= status < 300:
        raise _make_api_error(
            status=status,
            body=_try_extract_error(raw_text),
            request_url=request_url,
            raw_text=raw_text,
            capture_full_response=capture_full_response,
        )

    payload = load_json(raw_text, request_url=request_url)
    body = extract_api_error(payload)
    if body is not None:
        raise _make_api_error(
            status=body.status or status,
            body=body,
            request_url=request_url,
            raw_text=raw_text,
            capture_full_response=capture_full_response,
        )
    if not isinstance(payload, _JSON_KINDS[expect]):
        raise EurostatParseError(
            f"レスポンス本文の最上位がJSON {expect} ではありません: {type(payload).__name__}",
            request_url=request_url,
            raw_response_excerpt=raw_text[:RESPONSE_EXCERPT_LENGTH],
        )
    return payload, request_url


def _failed_url(
    exc: httpx.HTTPError,
    client: httpx.Client | httpx.AsyncClient,
    endpoint: str,
    params: Params | None,
) -> str:
    try:
        return str(exc.request.url)
    except RuntimeError:
        # 要求生成前に失敗した例外は request を持たない
        return str(client.build_request("GET", endpoint, params=params).url)


def perform_sync_request(
    *,
    client: httpx.Client,
    endpoint: str,
    params: Params | None,
    expect: JsonKind,
    user_agent: str,
    capture_full_response: bool,
) -> tuple[Any, str]:
    """同期GET要求を実行する。"""

    headers = dict(build_request_headers(user_agent))
    try:
        response = client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise EurostatTransportError(str(exc), request_url=_failed_url(exc, client, endpoint, params)) from exc
    return handle_response(response, expect=expect, capture_full_response=capture_full_response)


async def perform_async_request(
    *,
    client: httpx.AsyncClient,
    endpoint: str,
    params: Params | None,
    expect: JsonKind,
    user_agent: str,
    capture_full_response: bool,
) -> tuple[Any, str]:
    """非同期GET要求を実行する。"""

    headers = dict(build_request_headers(user_agent))
    try:
        response = await client.get(endpoint, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise EurostatTransportError(str(exc), request_url=_failed_url(exc, client, endpoint, params)) from exc
    return handle_response(response, expect=expect, capture_full_response=capture_full_response)
