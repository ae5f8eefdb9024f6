"""
WebSocket Handler Modülü

Bu modül, Binance WebSocket aboneliklerini yönetir. Order book derinliği,
kline, aggregated trade ve user data stream desteği sağlar.

Her abonelik yolu için tek bir bağlantı açılır. User data stream için
listen key REST istemcisinden alınır ve düzenli olarak ping atılarak
canlı tutulur.
"""

import asyncio
from typing import Any, Callable, Optional, Set

from src.api.binance_client import BinanceClient
from src.api.exceptions import AuthError
from src.api.socket_registry import DEFAULT_WS_URL, SocketRegistry
from src.utils.helpers import mask_key
from src.utils.logger import get_logger

logger = get_logger(__name__)

MessageCallback = Callable[[str], Any]


class WebSocketHandler:
    """
    Binance WebSocket abonelik yöneticisi.

    Bağlantılar bir SocketRegistry üzerinden paylaşılır. Kopan
    bağlantılar yeniden kurulmaz.
    """

    KEEP_ALIVE_INTERVAL = 60

    def __init__(
        self,
        registry: Optional[SocketRegistry] = None,
        base_url: str = DEFAULT_WS_URL,
        keep_alive_interval: float = KEEP_ALIVE_INTERVAL
    ):
        """
        WebSocketHandler'ı başlat.

        Args:
            registry: Paylaşılacak socket kaydı, None ise yenisi oluşturulur
            base_url: WebSocket base URL'i (registry verilmemişse kullanılır)
            keep_alive_interval: Listen key ping aralığı (saniye)
        """
        self.registry = registry if registry is not None else SocketRegistry(base_url)
        self.keep_alive_interval = keep_alive_interval
        self._keep_alive_tasks: Set[asyncio.Task] = set()

        logger.info(f"WebSocketHandler başlatıldı - {self.registry.base_url}")

    @classmethod
    def from_settings(cls, settings, **kwargs) -> 'WebSocketHandler':
        """Settings nesnesinden handler oluştur."""
        options = {
            'base_url': settings.get('binance.ws_url') or DEFAULT_WS_URL,
            'keep_alive_interval': settings.get(
                'websocket.keep_alive_interval', cls.KEEP_ALIVE_INTERVAL
            ),
        }
        options.update(kwargs)
        return cls(**options)

    def on_depth(self, symbol: str, callback: MessageCallback) -> Any:
        """
        Order book derinlik stream'ine abone ol.

        Args:
            symbol: Sembol (örn: 'ETHBTC')
            callback: Ham mesajla çağrılacak fonksiyon

        Returns:
            Socket handle
        """
        return self.registry.acquire(f"{symbol.lower()}@depth", callback)

    def on_kline(self, symbol: str, interval: str, callback: MessageCallback) -> Any:
        """
        Kline (mum) stream'ine abone ol.

        Args:
            symbol: Sembol
            interval: Zaman aralığı (1m, 5m, 15m, 1h, vb.)
            callback: Ham mesajla çağrılacak fonksiyon

        Returns:
            Socket handle
        """
        return self.registry.acquire(f"{symbol.lower()}@kline_{interval}", callback)

    def on_agg_trade(self, symbol: str, callback: MessageCallback) -> Any:
        """Aggregated trade stream'ine abone ol."""
        return self.registry.acquire(f"{symbol.lower()}@aggTrade", callback)

    def on_user_data(self, rest_client: BinanceClient, callback: MessageCallback):
        """
        Hesap, order ve işlem güncellemelerine abone ol.

        Kontroller senkron yapılır; listen key alma ve abonelik dönen
        awaitable beklendiğinde gerçekleşir.

        Args:
            rest_client: API anahtarı tanımlı BinanceClient
            callback: Ham mesajla çağrılacak fonksiyon

        Returns:
            Socket handle (listen key alınamadıysa None) döndüren awaitable

        Raises:
            TypeError: rest_client bir BinanceClient değilse
            AuthError: rest_client'ta API anahtarı yoksa
        """
        if not isinstance(rest_client, BinanceClient):
            raise TypeError("İlk parametre bir BinanceClient olmalı")

        if not rest_client.api_key:
            raise AuthError("User data stream için API anahtarı gerekli")

        return self._subscribe_user_data(rest_client, callback)

    async def _subscribe_user_data(
        self,
        rest_client: BinanceClient,
        callback: MessageCallback
    ) -> Any:
        try:
            data = await rest_client.user_data_stream()
        except Exception as e:
            logger.error(f"Listen key alınamadı: {e}")
            raise

        listen_key = data.get('listenKey') if isinstance(data, dict) else None
        if not listen_key:
            logger.warning("Listen key dönmedi, user data stream başlatılmadı")
            return None

        logger.info(f"Listen key alındı: {mask_key(listen_key)}")
        self._start_keep_alive(rest_client, listen_key)
        return self.registry.acquire(listen_key, callback)

    def _start_keep_alive(self, rest_client: BinanceClient, listen_key: str) -> None:
        task = asyncio.get_running_loop().create_task(
            self._keep_alive(rest_client, listen_key)
        )
        # Çalışan ping task'ları
        self._keep_alive_tasks.add(task)
        task.add_done_callback(self._keep_alive_tasks.discard)

    async def _keep_alive(self, rest_client: BinanceClient, listen_key: str) -> None:
        """Listen key'e düzenli ping at. Hatalar loglanır, tekrar denenmez."""
        while True:
            await asyncio.sleep(self.keep_alive_interval)
            try:
                response = await rest_client.ping_user_data_stream({'listenKey': listen_key})
                logger.debug(f"Listen key ping: {response}")
            except Exception as e:
                logger.warning(f"Listen key ping başarısız: {e}")
