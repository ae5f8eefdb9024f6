"""
API Hata Modülü

İstemci katmanının fırlattığı hata tipleri.

Senkron hatalar (ConstructionError, ValidationError, AuthError) ağ isteği
başlamadan fırlatılır. Asenkron hatalar (NetworkError, ExchangeAPIError)
yalnızca dönen awaitable beklendiğinde ortaya çıkar.
"""

from typing import Any, Optional


class BinanceClientError(Exception):
    """Tüm istemci hatalarının temel sınıfı."""


class ConstructionError(BinanceClientError):
    """API veya secret anahtarı hatalı formatta."""


class ValidationError(BinanceClientError):
    """Parametre eksik, tipi yanlış veya izin verilen değerler dışında."""

    def __init__(self, message: str, param: Optional[str] = None):
        super().__init__(message)
        self.param = param


class AuthError(BinanceClientError):
    """Metod için gerekli API anahtarı veya secret tanımlı değil."""


class NetworkError(BinanceClientError):
    """HTTP isteği gönderilemedi veya başarısız oldu."""


class ExchangeAPIError(NetworkError):
    """
    Borsa 2xx dışında bir yanıt döndürdü.

    Binance hata gövdesi ``{"code": -1121, "msg": "Invalid symbol."}``
    formatındadır; varsa ``code`` ve ``message`` alanlarına ayrıştırılır.
    """

    def __init__(self, status: int, body: Any = None):
        self.status = status
        self.body = body
        self.code = None
        self.message = None

        if isinstance(body, dict):
            self.code = body.get('code')
            self.message = body.get('msg')

        super().__init__(
            f"HTTP {status}: {self.message if self.message else body}"
        )
