"""例外定義。"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EurostatErrorContext:
    """例外に付随する共通コンテキスト。

    Attributes:
        request_url: リクエストURL。
        raw_response_excerpt: レスポンス抜粋。
        raw_response: 完全レスポンス。
    """

    request_url: str | None = None
    raw_response_excerpt: str | None = None
    raw_response: str | None = None


class EurostatError(Exception):
    """ライブラリ例外の基底クラス。

    Attributes:
        origin: 例外発生元。
        context: 追加コンテキスト。
    """

    def __init__(
        self,
        message: str,
        *,
        origin: str,
        context: EurostatErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.origin = origin
        self.context = context or EurostatErrorContext()


class EurostatFormatError(EurostatError):
    """カテゴリラベルの書式不正。

    Attributes:
        label: 解析できなかったラベル文字列。
    """

    def __init__(self, message: str, *, label: str) -> None:
        super().__init__(message, origin="decoder")
        self.label = label


class EurostatStructureError(EurostatError):
    """データセット構造（次元・カテゴリ索引）の不整合。"""

    def __init__(self, message: str, *, reason: str, dimension: str | None = None) -> None:
        super().__init__(message, origin="decoder")
        self.reason = reason
        self.dimension = dimension


class EurostatValidationError(EurostatError):
    """送信前バリデーションエラー。"""

    def __init__(self, message: str, *, validation_code: str) -> None:
        super().__init__(message, origin="client_validation")
        self.validation_code = validation_code


class EurostatTransportError(EurostatError):
    """HTTP通信層の例外。"""

    def __init__(self, message: str, *, request_url: str | None = None) -> None:
        super().__init__(
            message,
            origin="transport",
            context=EurostatErrorContext(request_url=request_url),
        )


class EurostatParseError(EurostatError):
    """レスポンス本文がJSONとして解釈できない。"""

    def __init__(
        self,
        message: str,
        *,
        request_url: str | None = None,
        raw_response_excerpt: str | None = None,
    ) -> None:
        super().__init__(
            message,
            origin="server_response",
            context=EurostatErrorContext(
                request_url=request_url,
                raw_response_excerpt=raw_response_excerpt,
            ),
        )


class EurostatApiError(EurostatError):
    """API応答由来の例外。"""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        error_id: str | None,
        request_url: str,
        raw_response_excerpt: str | None = None,
        raw_response: str | None = None,
    ) -> None:
        super().__init__(
            message,
            origin="server_response",
            context=EurostatErrorContext(
                request_url=request_url,
                raw_response_excerpt=raw_response_excerpt,
                raw_response=raw_response,
            ),
        )
        self.status = status
        self.error_id = error_id
        self.message = message


class EurostatNotFoundError(EurostatApiError):
    """STATUS=404の例外。"""


class EurostatBadRequestError(EurostatApiError):
    """STATUS=400の例外。"""


class EurostatServerError(EurostatApiError):
    """STATUS=5xxの例外。"""
