"""
API Modülü

Binance REST API istemcisi ve WebSocket yönetimi.
"""

from src.api.binance_client import BinanceClient
from src.api.exceptions import (
    AuthError,
    BinanceClientError,
    ConstructionError,
    ExchangeAPIError,
    NetworkError,
    ValidationError,
)
from src.api.query import Query, build_query
from src.api.signer import sign
from src.api.socket_registry import SocketRegistry
from src.api.validation import check_key, validate_params
from src.api.websocket_handler import WebSocketHandler

__all__ = [
    'BinanceClient',
    'WebSocketHandler',
    'SocketRegistry',
    'Query',
    'build_query',
    'sign',
    'check_key',
    'validate_params',
    'BinanceClientError',
    'ConstructionError',
    'ValidationError',
    'AuthError',
    'NetworkError',
    'ExchangeAPIError'
]
