"""
İmza Modülü

Signed endpoint'ler için HMAC-SHA256 imzası üretir.
"""

import hashlib
import hmac


def sign(payload: str, secret: str) -> str:
    """
    Query string'i secret anahtar ile imzala.

    Args:
        payload: İmzalanacak query string (örn: 'symbol=ETHBTC&timestamp=...')
        secret: Binance secret anahtarı

    Returns:
        64 karakterlik hex imza
    """
    return hmac.new(
        secret.encode('utf-8'),
        payload.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()
