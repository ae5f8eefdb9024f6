"""
Query Oluşturma Modülü

Endpoint yolu ve parametrelerden normal (public) veya imzalı (signed)
query string üretir.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Tuple

from src.api.exceptions import ValidationError
from src.api.signer import sign
from src.utils.helpers import current_timestamp_ms, format_param_value


@dataclass(frozen=True)
class Query:
    """
    Değişmez query nesnesi.

    ``plain()`` parametreleri olduğu gibi ekler, ``signed()`` her çağrıda
    yeni bir timestamp üretip imzayı hesaplar.
    """
    path: str
    tokens: Tuple[str, ...]
    secret: Optional[str] = field(default=None, repr=False)
    recv_window: Optional[int] = None
    clock: Callable[[], int] = current_timestamp_ms

    def plain(self) -> str:
        """Normal query string'i döndür."""
        if not self.tokens:
            return self.path
        return f"{self.path}?{'&'.join(self.tokens)}"

    def signed(self) -> str:
        """Timestamp ve imza eklenmiş query string'i döndür."""
        tokens = list(self.tokens)

        if self.recv_window:
            tokens.append(f"recvWindow={self.recv_window}")

        tokens.append(f"timestamp={self.clock()}")

        payload = '&'.join(tokens)
        signature = sign(payload, self.secret)
        return f"{self.path}?{payload}&signature={signature}"


def build_query(
    path: str,
    params: Mapping[str, Any],
    secret: Optional[str] = None,
    recv_window: Optional[int] = None,
    clock: Optional[Callable[[], int]] = None
) -> Query:
    """
    Query nesnesi oluştur.

    Args:
        path: Endpoint yolu (örn: 'v3/order')
        params: Query parametreleri
        secret: İmza için secret anahtar
        recv_window: recvWindow değeri (ms)
        clock: Epoch milisaniye döndüren fonksiyon

    Returns:
        Query nesnesi

    Raises:
        ValidationError: Yol veya parametreler hatalıysa
    """
    if not path or not isinstance(path, str):
        raise ValidationError("Url eksik, string olmalı")

    if not isinstance(params, Mapping):
        raise ValidationError("params dictionary olmalı")

    # timestamp her zaman imzalama anında üretilir
    tokens = tuple(
        f"{key}={format_param_value(value)}" for key, value in params.items()
        if key != 'timestamp'
    )

    return Query(
        path=path,
        tokens=tokens,
        secret=secret,
        recv_window=recv_window,
        clock=clock or current_timestamp_ms
    )
