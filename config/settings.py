"""
Uygulama Ayarları Modülü

Bu modül, YAML konfigürasyon dosyasını ve environment variable'ları
yükleyerek istemcilerin kullanacağı ayarları sağlar.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

DEFAULT_REST_URL = "https://api.binance.com/api/"
DEFAULT_WS_URL = "wss://stream.binance.com:9443/ws/"

LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')


class Settings:
    """
    Uygulama ayarlarını yöneten sınıf.

    YAML konfigürasyon dosyası ve environment variable'ları birleştirerek
    tek bir ayar nesnesi oluşturur.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Settings sınıfını başlat.

        Args:
            config_path: Konfigürasyon dosyasının yolu. None ise varsayılan yol kullanılır.
        """
        load_dotenv()

        if config_path is None:
            base_dir = Path(__file__).parent.parent
            config_path = base_dir / "config" / "config.yaml"

        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}

        self._load_config()
        self._load_env_overrides()

    def _load_config(self) -> None:
        """YAML konfigürasyon dosyasını yükle, eksik bölümleri varsayılanlarla doldur."""
        loaded: Dict[str, Any] = {}

        if self.config_path.exists():
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        else:
            # Örnek konfigürasyon dosyasını dene
            example_path = self.config_path.with_suffix('.example.yaml')
            if example_path.exists():
                with open(example_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}

        self._config = self._get_default_config()
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self._config.get(section), dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _load_env_overrides(self) -> None:
        """Environment variable'lardan API bilgilerini yükle ve override et."""
        api_key = os.getenv('BINANCE_API_KEY')
        api_secret = os.getenv('BINANCE_API_SECRET')
        recv_window = os.getenv('BINANCE_RECV_WINDOW')

        if api_key:
            self.set('binance.api_key', api_key)
        if api_secret:
            self.set('binance.api_secret', api_secret)
        if recv_window:
            self.set('binance.recv_window', int(recv_window))

        log_level = os.getenv('LOG_LEVEL')
        if log_level:
            self.set('logging.level', log_level.upper())

    def _get_default_config(self) -> Dict[str, Any]:
        """Varsayılan konfigürasyonu döndür."""
        return {
            'binance': {
                'api_key': None,
                'api_secret': None,
                'recv_window': None,
                'rest_url': DEFAULT_REST_URL,
                'ws_url': DEFAULT_WS_URL,
                'request_timeout': 10
            },
            'websocket': {
                'keep_alive_interval': 60
            },
            'logging': {
                'level': 'INFO',
                'file_path': None,
                'max_size': 10,
                'backup_count': 5,
                'console_output': True
            }
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Belirtilen anahtara göre ayar değerini döndür.

        Args:
            key: Nokta ile ayrılmış anahtar (örn: 'binance.api_key')
            default: Anahtar bulunamazsa döndürülecek varsayılan değer

        Returns:
            Ayar değeri veya varsayılan değer
        """
        value = self._config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Belirtilen anahtara değer ata.

        Args:
            key: Nokta ile ayrılmış anahtar (örn: 'binance.api_key')
            value: Atanacak değer
        """
        keys = key.split('.')
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    @property
    def binance(self) -> Dict[str, Any]:
        """Binance ayarlarını döndür."""
        return self._config.get('binance', {})

    @property
    def websocket(self) -> Dict[str, Any]:
        """WebSocket ayarlarını döndür."""
        return self._config.get('websocket', {})

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Loglama ayarlarını döndür."""
        return self._config.get('logging', {})

    def to_dict(self) -> Dict[str, Any]:
        """Tüm ayarları dictionary olarak döndür."""
        return copy.deepcopy(self._config)

    def validate(self) -> bool:
        """
        Konfigürasyonun geçerliliğini kontrol et.

        Anahtar formatı burada değil, istemci oluşturulurken kontrol edilir.

        Returns:
            bool: Konfigürasyon geçerli ise True

        Raises:
            ValueError: Konfigürasyon geçersiz ise
        """
        recv_window = self.get('binance.recv_window')
        if recv_window is not None and (not isinstance(recv_window, int) or recv_window <= 0):
            raise ValueError("recv_window pozitif bir tamsayı olmalı")

        interval = self.get('websocket.keep_alive_interval', 60)
        if not isinstance(interval, (int, float)) or interval <= 0:
            raise ValueError("keep_alive_interval pozitif olmalı")

        level = str(self.get('logging.level', 'INFO')).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Geçersiz log seviyesi: {level}")

        return True


# Global settings instance
_settings: Optional[Settings] = None


def get_settings(config_path: Optional[str] = None) -> Settings:
    """
    Global settings instance'ını döndür.

    Args:
        config_path: Konfigürasyon dosyasının yolu

    Returns:
        Settings: Ayarlar nesnesi
    """
    global _settings
    if _settings is None or config_path is not None:
        _settings = Settings(config_path)
    return _settings
