"""
Parametre Doğrulama Modülü

Metodlara verilen parametrelerin varlığını, tipini ve enum değerlerini
istek oluşturulmadan önce kontrol eder. Hangi alanın hangi tipte olduğu
ve her operasyonun hangi alanları zorunlu tuttuğu tablolarda tanımlıdır.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from binance.enums import (
    ORDER_TYPE_LIMIT,
    ORDER_TYPE_MARKET,
    SIDE_BUY,
    SIDE_SELL,
    TIME_IN_FORCE_GTC,
    TIME_IN_FORCE_IOC,
)

from src.api.exceptions import ConstructionError, ValidationError

KEY_LENGTH = 64


class ParamKind(Enum):
    """Parametre tipleri."""
    STRING = "string"
    NUMBER = "number"
    ENUM = "enum"


@dataclass(frozen=True)
class ParamRule:
    """Tek bir parametre için tip kuralı."""
    kind: ParamKind
    choices: Tuple[str, ...] = ()


PARAM_RULES: Dict[str, ParamRule] = {
    'symbol': ParamRule(ParamKind.STRING),
    'newClientOrderId': ParamRule(ParamKind.STRING),
    'origClientOrderId': ParamRule(ParamKind.STRING),
    'listenKey': ParamRule(ParamKind.STRING),
    'side': ParamRule(ParamKind.ENUM, (SIDE_BUY, SIDE_SELL)),
    'type': ParamRule(ParamKind.ENUM, (ORDER_TYPE_LIMIT, ORDER_TYPE_MARKET)),
    'timeInForce': ParamRule(ParamKind.ENUM, (TIME_IN_FORCE_GTC, TIME_IN_FORCE_IOC)),
    'quantity': ParamRule(ParamKind.NUMBER),
    'price': ParamRule(ParamKind.NUMBER),
    'stopPrice': ParamRule(ParamKind.NUMBER),
    'icebergQty': ParamRule(ParamKind.NUMBER),
    'recvWindow': ParamRule(ParamKind.NUMBER),
    'fromId': ParamRule(ParamKind.NUMBER),
}

# Operasyon başına zorunlu parametreler
OPERATION_REQUIRED: Dict[str, Tuple[str, ...]] = {
    'all_prices': (),
    'depth': ('symbol',),
    'new_order': ('symbol', 'side', 'type', 'timeInForce', 'quantity', 'price'),
    'open_orders': ('symbol',),
    'all_orders': ('symbol',),
    'order_status': ('symbol',),
    'cancel_order': ('symbol',),
    'account': (),
    'my_trades': ('symbol',),
    'user_data_stream': (),
    'ping_user_data_stream': ('listenKey',),
    'delete_user_data_stream': ('listenKey',),
}


def check_key(key: Any) -> Optional[str]:
    """
    API veya secret anahtarının formatını kontrol et.

    Args:
        key: Kontrol edilecek anahtar

    Returns:
        Geçerliyse anahtarın kendisi, verilmemişse None

    Raises:
        ConstructionError: Anahtar verilmiş ama formatı hatalıysa
    """
    if not key:
        return None

    if isinstance(key, str) and len(key) == KEY_LENGTH:
        return key

    raise ConstructionError(
        f"Hatalı anahtar formatı: {KEY_LENGTH} karakterlik string bekleniyor"
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_param(key: str, value: Any) -> None:
    """
    Tek bir parametreyi kuralına göre kontrol et.

    Kuralı olmayan parametreler olduğu gibi geçer.
    """
    rule = PARAM_RULES.get(key)
    if rule is None:
        return

    if rule.kind is ParamKind.STRING and not isinstance(value, str):
        raise ValidationError(f"{key} string olmalı", param=key)

    if rule.kind is ParamKind.NUMBER and not _is_number(value):
        raise ValidationError(f"{key} sayı olmalı", param=key)

    if rule.kind is ParamKind.ENUM and value not in rule.choices:
        raise ValidationError(
            f"{key} geçersiz, olası değerler: {', '.join(rule.choices)}",
            param=key
        )


def validate_params(params: Any, required: Any) -> None:
    """
    Metoda verilen parametreleri kontrol et.

    Args:
        params: Parametre dictionary'si
        required: Metod için zorunlu parametre isimleri

    Raises:
        ValidationError: Parametreler eksik veya hatalıysa
    """
    if not isinstance(params, Mapping):
        raise ValidationError("params zorunlu ve dictionary olmalı")

    if not isinstance(required, (list, tuple)):
        raise ValidationError("required zorunlu ve liste olmalı")

    for name in required:
        if not params.get(name):
            raise ValidationError(f"{name} parametresi bu metod için zorunlu", param=name)

    for key, value in params.items():
        check_param(key, value)


def validate_operation(operation: str, params: Any) -> None:
    """Operasyonun zorunlu alan tablosuna göre parametreleri kontrol et."""
    validate_params(params, OPERATION_REQUIRED[operation])
