"""
Loglama Modülü

İstemci kütüphanesinin loglama ayarları. Loguru kullanılır; kütüphane
modülleri ``get_logger(__name__)`` ile isim bağlanmış bir logger alır.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
)

PLAIN_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} | {message}"
)

DEFAULT_LOGGER_NAME = "binance_api"


def _with_default_name(record: Dict[str, Any]) -> bool:
    """İsim bağlanmamış kayıtlara varsayılan ismi ekle."""
    record["extra"].setdefault("name", DEFAULT_LOGGER_NAME)
    return True


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_size: int = 10,
    backup_count: int = 5,
    console_output: bool = True
) -> None:
    """
    Logger'ı yapılandır.

    Args:
        level: Log seviyesi (DEBUG, INFO, WARNING, ERROR)
        log_file: Log dosyasının yolu
        max_size: Maksimum log dosyası boyutu (MB)
        backup_count: Saklanacak yedek dosya sayısı
        console_output: Konsola log yazılsın mı
    """
    logger.remove()

    if console_output:
        logger.add(
            sys.stderr,
            format=LOG_FORMAT,
            level=level,
            colorize=True,
            filter=_with_default_name
        )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_file,
            format=PLAIN_LOG_FORMAT,
            level=level,
            rotation=f"{max_size} MB",
            retention=backup_count,
            compression="zip",
            filter=_with_default_name
        )


def setup_logger_from_config(config: Dict[str, Any]) -> None:
    """Settings içindeki 'logging' bölümüyle logger'ı yapılandır."""
    setup_logger(
        level=config.get('level', 'INFO'),
        log_file=config.get('file_path'),
        max_size=config.get('max_size', 10),
        backup_count=config.get('backup_count', 5),
        console_output=config.get('console_output', True)
    )


def get_logger(name: str = DEFAULT_LOGGER_NAME):
    """
    Belirtilen isimle bir logger instance'ı döndür.

    Args:
        name: Logger ismi

    Returns:
        Logger instance
    """
    return logger.bind(name=name)
