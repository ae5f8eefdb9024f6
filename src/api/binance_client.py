"""
Binance REST API Client Modülü

Bu modül, Binance spot REST API'si ile iletişim kurmak için gerekli
istemci sınıfını içerir. Fiyat listesi, order book, order verme/iptal,
hesap ve işlem geçmişi ile user data stream yaşam döngüsünü kapsar.

Her operasyon metodu yetki kontrolünü, parametre doğrulamasını ve query
oluşturmayı senkron olarak yapar, ardından isteği gerçekleştiren bir
awaitable döndürür. Böylece hatalı bir çağrı hiçbir zaman ağ isteğine
dönüşmez::

    client = BinanceClient(api_key=KEY, api_secret=SECRET)
    order = await client.new_order({...})
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from src.api.exceptions import AuthError
from src.api.query import Query, build_query
from src.api.transport import HttpTransport
from src.api.validation import check_key, validate_operation
from src.utils.helpers import mask_key
from src.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_REST_URL = "https://api.binance.com/api/"
API_KEY_HEADER = "X-MBX-APIKEY"

ALL_PRICES_URL = "v1/ticker/allPrices"
DEPTH_URL = "v1/depth"
ORDER_URL = "v3/order"
OPEN_ORDERS_URL = "v3/openOrders"
ALL_ORDERS_URL = "v3/allOrders"
ACCOUNT_URL = "v3/account"
MY_TRADES_URL = "v3/myTrades"
USER_DATA_STREAM_URL = "v1/userDataStream"


class BinanceClient:
    """
    Binance REST API istemcisi.

    API anahtarı olmadan yalnızca public metodlar kullanılabilir. User
    data stream metodları sadece API anahtarı, diğer özel metodlar API
    anahtarı ve secret gerektirir.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        recv_window: Optional[int] = None,
        base_url: str = DEFAULT_REST_URL,
        request_timeout: float = 10.0,
        transport: Optional[HttpTransport] = None,
        clock: Optional[Callable[[], int]] = None
    ):
        """
        BinanceClient'ı başlat.

        Args:
            api_key: Binance API anahtarı (64 karakter)
            api_secret: Binance secret anahtarı (64 karakter)
            recv_window: Signed isteklere eklenecek recvWindow (ms)
            base_url: REST API base URL'i
            request_timeout: HTTP istek zaman aşımı (saniye)
            transport: Hazır HTTP transport (test için)
            clock: Timestamp üreten fonksiyon (test için)

        Raises:
            ConstructionError: Anahtar formatı hatalıysa
        """
        self.api_key = check_key(api_key)
        self.api_secret = check_key(api_secret)
        self.recv_window = recv_window
        self.clock = clock

        if transport is None:
            headers = {API_KEY_HEADER: self.api_key} if self.api_key else {}
            transport = HttpTransport(base_url, headers=headers, timeout=request_timeout)
        self.transport = transport

        logger.info(
            f"BinanceClient başlatıldı - API key: {mask_key(self.api_key)}, "
            f"Secret: {'var' if self.api_secret else 'yok'}"
        )

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'BinanceClient':
        """
        Settings nesnesinden istemci oluştur.

        Args:
            settings: config.settings.Settings nesnesi
            **kwargs: Settings değerlerini ezen ek argümanlar
        """
        binance = settings.binance
        options = {
            'api_key': binance.get('api_key'),
            'api_secret': binance.get('api_secret'),
            'recv_window': binance.get('recv_window'),
            'base_url': binance.get('rest_url') or DEFAULT_REST_URL,
            'request_timeout': binance.get('request_timeout', 10.0),
        }
        options.update(kwargs)
        return cls(**options)

    async def __aenter__(self) -> 'BinanceClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def require_api_key(self) -> None:
        """
        API anahtarı yoksa hata fırlat.

        Raises:
            AuthError: API anahtarı tanımlı değilse
        """
        if not self.api_key:
            raise AuthError("Bu metod için API anahtarı gerekli")

    def require_signed_access(self) -> None:
        """
        API anahtarı veya secret yoksa hata fırlat.

        Raises:
            AuthError: API anahtarı veya secret tanımlı değilse
        """
        self.require_api_key()
        if not self.api_secret:
            raise AuthError("Bu metod için secret anahtarı gerekli")

    def _query(self, url: str, params: Mapping[str, Any]) -> Query:
        return build_query(
            url,
            params,
            secret=self.api_secret,
            recv_window=self.recv_window,
            clock=self.clock
        )

    def _signed_request(
        self,
        operation: str,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]]
    ) -> Awaitable[Any]:
        """Signed operasyonlar için ortak akış: yetki, doğrulama, imza."""
        self.require_signed_access()
        params = {} if params is None else params
        validate_operation(operation, params)
        return self._send(method, self._query(url, params).signed())

    def _api_key_request(
        self,
        operation: str,
        method: str,
        params: Optional[Mapping[str, Any]]
    ) -> Awaitable[Any]:
        """User data stream operasyonları için ortak akış: sadece API anahtarı."""
        self.require_api_key()
        params = {} if params is None else params
        validate_operation(operation, params)
        return self._send(method, self._query(USER_DATA_STREAM_URL, params).plain())

    async def _send(self, method: str, path: str) -> Any:
        return await self.transport.request(method, path)

    def all_prices(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[List[Dict[str, Any]]]:
        """
        Tüm sembollerin fiyatını getir.

        Args:
            params: {'symbol': 'ETHBTC'} verilirse sonuç o sembole daraltılır

        Returns:
            Fiyat listesi döndüren awaitable
        """
        symbol = params.get('symbol') if isinstance(params, Mapping) else None
        return self._all_prices(self._query(ALL_PRICES_URL, {}).plain(), symbol)

    async def _all_prices(self, path: str, symbol: Any) -> List[Dict[str, Any]]:
        data = await self._send('GET', path)
        if isinstance(symbol, str):
            return [price for price in data if price.get('symbol') == symbol]
        return data

    def depth(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """
        Sembolün order book derinliğini getir.

        Args:
            params: {'symbol': ..., 'limit': ...}
        """
        return self._signed_request('depth', 'GET', DEPTH_URL, params)

    def new_order(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """
        Yeni order ver.

        Args:
            params: symbol, side, type, timeInForce, quantity ve price zorunlu;
                newClientOrderId, stopPrice, icebergQty opsiyonel

        Returns:
            Order bilgisi döndüren awaitable
        """
        return self._signed_request('new_order', 'POST', ORDER_URL, params)

    def open_orders(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[List[Dict[str, Any]]]:
        """Sembol için açık order'ları getir."""
        return self._signed_request('open_orders', 'GET', OPEN_ORDERS_URL, params)

    def all_orders(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[List[Dict[str, Any]]]:
        """Sembol için açık veya kapanmış tüm order'ları getir."""
        return self._signed_request('all_orders', 'GET', ALL_ORDERS_URL, params)

    def order_status(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """
        Order durumunu getir.

        Args:
            params: symbol zorunlu; orderId veya origClientOrderId
        """
        return self._signed_request('order_status', 'GET', ORDER_URL, params)

    def cancel_order(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """
        Order iptal et.

        Args:
            params: symbol zorunlu; orderId veya origClientOrderId
        """
        return self._signed_request('cancel_order', 'DELETE', ORDER_URL, params)

    def account(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """Hesap bilgilerini (bakiyeler, komisyonlar) getir."""
        return self._signed_request('account', 'GET', ACCOUNT_URL, params)

    def my_trades(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[List[Dict[str, Any]]]:
        """
        Sembol için işlem geçmişini getir.

        Args:
            params: symbol zorunlu; fromId, limit opsiyonel
        """
        return self._signed_request('my_trades', 'GET', MY_TRADES_URL, params)

    def user_data_stream(self) -> Awaitable[Dict[str, Any]]:
        """
        Yeni bir listen key al.

        Returns:
            {'listenKey': ...} döndüren awaitable
        """
        return self._api_key_request('user_data_stream', 'POST', {})

    def ping_user_data_stream(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """Listen key'in zaman aşımına uğramaması için ping at."""
        return self._api_key_request('ping_user_data_stream', 'PUT', params)

    def delete_user_data_stream(self, params: Optional[Mapping[str, Any]] = None) -> Awaitable[Dict[str, Any]]:
        """Listen key'i kapat."""
        return self._api_key_request('delete_user_data_stream', 'DELETE', params)

    async def close(self) -> None:
        """
        Client bağlantısını kapat.
        """
        await self.transport.close()
        logger.info("Binance client bağlantısı kapatıldı")
