"""
Yardımcı Fonksiyonlar Modülü

Bu modül, uygulama genelinde kullanılacak yardımcı fonksiyonları içerir.
"""

import time
from decimal import Decimal
from typing import Any, Optional


def current_timestamp_ms() -> int:
    """
    Şu anki zamanı epoch milisaniye olarak döndür.

    Returns:
        Epoch milisaniye
    """
    return int(time.time() * 1000)


def mask_key(key: Optional[str], visible: int = 8) -> str:
    """
    Anahtarı log'a yazmak için maskele.

    Args:
        key: API anahtarı veya listen key
        visible: Görünür bırakılacak karakter sayısı

    Returns:
        Maskelenmiş string
    """
    if not key:
        return '-'
    return f"{key[:visible]}..."


def format_param_value(value: Any) -> str:
    """
    Parametre değerini query string için yaz.

    Float ve Decimal değerler bilimsel gösterim yerine düz ondalık
    olarak yazılır (örn: 0.00002345).

    Args:
        value: Parametre değeri

    Returns:
        String değer
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return format(Decimal(repr(value)), 'f')
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)
