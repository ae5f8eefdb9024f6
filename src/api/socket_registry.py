"""
Socket Kayıt Modülü

Abonelik yolu başına tek bir WebSocket bağlantısı tutar. Aynı yola ikinci
kez abone olunduğunda mevcut bağlantı döndürülür.
"""

import threading
from typing import Any, Callable, Dict, Optional, Tuple

import websocket

from src.api.exceptions import ValidationError
from src.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_WS_URL = "wss://stream.binance.com:9443/ws/"

SocketFactory = Callable[[str, Callable[[str], Any]], Any]


def _on_error(ws, error) -> None:
    logger.error(f"WebSocket hatası: {error}")


def _on_close(ws, close_status_code, close_msg) -> None:
    logger.warning(
        f"WebSocket bağlantısı kapandı - "
        f"Kod: {close_status_code}, Mesaj: {close_msg}"
    )


def _on_open(ws) -> None:
    logger.info(f"WebSocket bağlantısı açıldı: {ws.url.split('/ws/')[-1][:16]}")


def open_socket(url: str, on_message: Callable[[str], Any]) -> websocket.WebSocketApp:
    """
    WebSocket bağlantısını aç ve arka planda çalıştır.

    Gelen ham mesajlar ``on_message``'a olduğu gibi iletilir. Bağlantı
    koparsa yeniden bağlanılmaz.

    Args:
        url: Tam WebSocket URL'i
        on_message: Her mesajda çağrılacak fonksiyon

    Returns:
        WebSocketApp instance'ı
    """
    ws = websocket.WebSocketApp(
        url,
        on_message=lambda ws, message: on_message(message),
        on_error=_on_error,
        on_close=_on_close,
        on_open=_on_open
    )

    thread = threading.Thread(target=ws.run_forever, daemon=True)
    thread.start()

    return ws


class SocketRegistry:
    """
    Yol -> (socket, callback) kaydı.

    Kayıtlar silinmez; bağlantılar süreç boyunca yaşar.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_WS_URL,
        socket_factory: Optional[SocketFactory] = None
    ):
        """
        SocketRegistry'yi başlat.

        Args:
            base_url: Yolların başına eklenecek WebSocket URL'i
            socket_factory: (url, on_message) alıp socket döndüren fonksiyon
        """
        self.base_url = base_url
        self.socket_factory = socket_factory or open_socket
        self._entries: Dict[str, Tuple[Any, Callable]] = {}
        self._lock = threading.Lock()

    def acquire(self, path: str, on_message: Callable[[str], Any]) -> Any:
        """
        Yol için socket döndür, yoksa aç.

        Yol zaten kayıtlıysa mevcut socket döndürülür ve yeni callback
        bağlanmaz.

        Args:
            path: Abonelik yolu (örn: 'ethbtc@depth')
            on_message: Mesaj callback'i

        Returns:
            Socket handle

        Raises:
            ValidationError: path boş veya string değilse
            TypeError: on_message çağrılabilir değilse
        """
        if not path or not isinstance(path, str):
            raise ValidationError("path zorunlu ve string olmalı", param='path')

        if not callable(on_message):
            raise TypeError("callback zorunlu ve fonksiyon olmalı")

        with self._lock:
            entry = self._entries.get(path)
            if entry is not None:
                logger.debug(f"Mevcut socket kullanılıyor, yeni callback bağlanmadı: {path[:24]}")
                return entry[0]

            socket = self.socket_factory(f"{self.base_url}{path}", on_message)
            self._entries[path] = (socket, on_message)

        logger.info(f"Stream'e abone olundu: {path[:24]}")
        return socket

    def contains(self, path: str) -> bool:
        """Yol için kayıtlı socket var mı."""
        with self._lock:
            return path in self._entries

    def get(self, path: str) -> Optional[Any]:
        """Yol için kayıtlı socket'i döndür."""
        with self._lock:
            entry = self._entries.get(path)
        return entry[0] if entry else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
