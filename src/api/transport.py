"""
HTTP Transport Modülü

aiohttp üzerinde, sabit bir base URL ve varsayılan header'larla çalışan
asenkron HTTP istemcisi.
"""

import asyncio
import json
from typing import Any, Dict, Optional

import aiohttp

from src.api.exceptions import ExchangeAPIError, NetworkError
from src.utils.logger import get_logger

logger = get_logger(__name__)


class HttpTransport:
    """
    Binance REST API için HTTP transport.

    Session ilk istekte oluşturulur ve ``close()`` çağrılana kadar
    yeniden kullanılır.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0
    ):
        """
        HttpTransport'u başlat.

        Args:
            base_url: Tüm isteklerin başına eklenecek URL
            headers: Her istekte gönderilecek varsayılan header'lar
            timeout: Toplam istek zaman aşımı (saniye)
        """
        self.base_url = base_url
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        """Yanıt gövdesini JSON olarak oku, JSON değilse metin döndür."""
        raw = await response.read()
        try:
            text = raw.decode(response.charset or 'utf-8', errors='replace')
        except LookupError:
            text = raw.decode('utf-8', errors='replace')
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    async def request(self, method: str, path: str) -> Any:
        """
        HTTP isteği gönder.

        Args:
            method: HTTP metodu (GET, POST, PUT, DELETE)
            path: Base URL'e göre göreli yol ve query string

        Returns:
            Yanıt gövdesi

        Raises:
            ExchangeAPIError: Sunucu 2xx dışında yanıt döndürdüyse
            NetworkError: İstek gönderilemediyse
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url.split('?')[0]}")

        try:
            async with self._get_session().request(method, url) as response:
                body = await self._read_body(response)
                if response.status >= 400:
                    raise ExchangeAPIError(response.status, body)
                return body
        except ExchangeAPIError as e:
            logger.error(f"API hatası - {method} {path.split('?')[0]}: {e}")
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"HTTP isteği başarısız - {method} {path.split('?')[0]}: {e}")
            raise NetworkError(str(e) or type(e).__name__) from e

    async def get(self, path: str) -> Any:
        return await self.request('GET', path)

    async def post(self, path: str) -> Any:
        return await self.request('POST', path)

    async def put(self, path: str) -> Any:
        return await self.request('PUT', path)

    async def delete(self, path: str) -> Any:
        return await self.request('DELETE', path)

    async def close(self) -> None:
        """Session'ı kapat."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("HTTP session kapatıldı")
        self._session = None
