"""
İmza, Query ve Doğrulama Testleri
"""

import hashlib
import hmac
from decimal import Decimal

import pytest

from src.api.exceptions import ConstructionError, ValidationError
from src.api.query import build_query
from src.api.signer import sign
from src.api.validation import check_key, validate_params

SECRET = 'b' * 64
FIXED_TIMESTAMP = 1508279351690


def fixed_clock():
    return FIXED_TIMESTAMP


class TestSigner:
    """HMAC imza testleri."""

    def test_signature_matches_hmac_sha256(self):
        payload = 'symbol=ETHBTC&timestamp=1508279351690'
        expected = hmac.new(SECRET.encode(), payload.encode(), hashlib.sha256).hexdigest()

        assert sign(payload, SECRET) == expected

    def test_signature_is_64_hex_chars(self):
        signature = sign('symbol=ETHBTC', SECRET)

        assert len(signature) == 64
        int(signature, 16)

    def test_single_character_change(self):
        assert sign('symbol=ETHBTC', SECRET) != sign('symbol=ETHBTD', SECRET)


class TestQuery:
    """Query oluşturma testleri."""

    def test_plain_without_params(self):
        """Parametresiz query'de '?' olmamalı."""
        assert build_query('v3/account', {}).plain() == 'v3/account'

    def test_plain_with_params(self):
        query = build_query('v1/depth', {'symbol': 'ETHBTC', 'limit': 10})

        assert query.plain() == 'v1/depth?symbol=ETHBTC&limit=10'

    def test_signed_is_deterministic(self):
        """Sabit saat ve secret ile imza tekrarlanabilir olmalı."""
        query = build_query('v3/order', {'symbol': 'ETHBTC'}, secret=SECRET, clock=fixed_clock)

        first = query.signed()
        second = query.signed()

        payload = f'symbol=ETHBTC&timestamp={FIXED_TIMESTAMP}'
        assert first == second
        assert first == f'v3/order?{payload}&signature={sign(payload, SECRET)}'

    def test_signed_changes_with_params(self):
        first = build_query('v3/order', {'symbol': 'ETHBTC'}, secret=SECRET, clock=fixed_clock)
        second = build_query('v3/order', {'symbol': 'ETHBTD'}, secret=SECRET, clock=fixed_clock)

        assert first.signed().split('signature=')[1] != second.signed().split('signature=')[1]

    def test_signed_with_recv_window(self):
        query = build_query(
            'v3/order', {'symbol': 'ETHBTC'},
            secret=SECRET, recv_window=5000, clock=fixed_clock
        )

        signed = query.signed()

        assert signed.startswith(
            f'v3/order?symbol=ETHBTC&recvWindow=5000&timestamp={FIXED_TIMESTAMP}&signature='
        )
        # Tekrar çağrıldığında recvWindow çoğalmamalı
        assert query.signed().count('recvWindow') == 1

    def test_signed_without_params(self):
        query = build_query('v3/account', {}, secret=SECRET, clock=fixed_clock)

        assert query.signed().startswith(f'v3/account?timestamp={FIXED_TIMESTAMP}&signature=')

    def test_timestamp_param_stripped(self):
        """Parametrelerdeki timestamp atılmalı, girdi değişmemeli."""
        params = {'symbol': 'ETHBTC', 'timestamp': 123}

        query = build_query('v3/order', params, secret=SECRET, clock=fixed_clock)

        assert query.plain() == 'v3/order?symbol=ETHBTC'
        assert 'timestamp=123' not in query.signed()
        assert params == {'symbol': 'ETHBTC', 'timestamp': 123}

    def test_timestamp_generated_at_signing_time(self):
        ticks = iter([1000, 2000])
        query = build_query('v3/account', {}, secret=SECRET, clock=lambda: next(ticks))

        assert 'timestamp=1000' in query.signed()
        assert 'timestamp=2000' in query.signed()

    @pytest.mark.parametrize('path', ['', None, 42])
    def test_bad_path(self, path):
        with pytest.raises(ValidationError):
            build_query(path, {})

    def test_bad_params(self):
        with pytest.raises(ValidationError):
            build_query('v3/order', ['symbol'])

    def test_none_params_rejected(self):
        with pytest.raises(ValidationError):
            build_query('v3/order', None)

    def test_small_price_in_decimal_form(self):
        """Küçük fiyatlar bilimsel gösterimle yazılmamalı."""
        query = build_query(
            'v3/order',
            {'symbol': 'XVGBTC', 'quantity': 100, 'price': 0.00002345},
            secret=SECRET, clock=fixed_clock
        )

        assert query.plain() == 'v3/order?symbol=XVGBTC&quantity=100&price=0.00002345'

        payload = f'symbol=XVGBTC&quantity=100&price=0.00002345&timestamp={FIXED_TIMESTAMP}'
        assert query.signed() == f'v3/order?{payload}&signature={sign(payload, SECRET)}'

    @pytest.mark.parametrize('value, expected', [
        (0.0000001, '0.0000001'),
        (1.5, '1.5'),
        (1e16, '10000000000000000'),
        (Decimal('1E-8'), '0.00000001'),
        (7, '7'),
        ('GTC', 'GTC'),
    ])
    def test_param_value_rendering(self, value, expected):
        assert build_query('v3/order', {'price': value}).plain() == f'v3/order?price={expected}'


class TestCheckKey:
    """Anahtar formatı testleri."""

    def test_valid_key(self):
        key = 'k' * 64
        assert check_key(key) == key

    @pytest.mark.parametrize('key', [None, ''])
    def test_absent_key(self, key):
        assert check_key(key) is None

    @pytest.mark.parametrize('key', ['k' * 63, 'k' * 65, 64, ['k' * 64]])
    def test_bad_key(self, key):
        with pytest.raises(ConstructionError):
            check_key(key)


class TestValidateParams:
    """Parametre doğrulama testleri."""

    ORDER = {
        'symbol': 'ETHBTC',
        'side': 'BUY',
        'type': 'LIMIT',
        'timeInForce': 'GTC',
        'quantity': 1,
        'price': 0.05
    }
    ORDER_REQUIRED = ['symbol', 'side', 'type', 'timeInForce', 'quantity', 'price']

    def test_valid_order(self):
        assert validate_params(dict(self.ORDER), self.ORDER_REQUIRED) is None

    @pytest.mark.parametrize('missing', ORDER_REQUIRED)
    def test_missing_required(self, missing):
        params = dict(self.ORDER)
        del params[missing]

        with pytest.raises(ValidationError) as exc_info:
            validate_params(params, self.ORDER_REQUIRED)

        assert exc_info.value.param == missing
        assert missing in str(exc_info.value)

    def test_falsy_required_value(self):
        with pytest.raises(ValidationError):
            validate_params({'symbol': ''}, ['symbol'])

    @pytest.mark.parametrize('side', ['BUY', 'SELL'])
    def test_valid_side(self, side):
        validate_params({'side': side}, [])

    @pytest.mark.parametrize('side', ['buy', 'HOLD', 1])
    def test_invalid_side(self, side):
        with pytest.raises(ValidationError) as exc_info:
            validate_params({'side': side}, [])

        assert exc_info.value.param == 'side'

    def test_invalid_order_type(self):
        with pytest.raises(ValidationError):
            validate_params({'type': 'STOP_LOSS'}, [])

    def test_invalid_time_in_force(self):
        with pytest.raises(ValidationError):
            validate_params({'timeInForce': 'FOK'}, [])

    @pytest.mark.parametrize('key', ['symbol', 'newClientOrderId', 'origClientOrderId', 'listenKey'])
    def test_string_fields(self, key):
        with pytest.raises(ValidationError):
            validate_params({key: 123}, [])

    @pytest.mark.parametrize('key', ['quantity', 'price', 'stopPrice', 'icebergQty', 'recvWindow', 'fromId'])
    def test_number_fields(self, key):
        validate_params({key: 1.5}, [])

        with pytest.raises(ValidationError):
            validate_params({key: '1.5'}, [])

    def test_bool_is_not_a_number(self):
        with pytest.raises(ValidationError):
            validate_params({'quantity': True}, [])

    def test_unknown_fields_pass(self):
        validate_params({'limit': 'anything', 'orderId': 5}, [])

    def test_params_must_be_mapping(self):
        with pytest.raises(ValidationError):
            validate_params(None, [])

    def test_required_must_be_list(self):
        with pytest.raises(ValidationError):
            validate_params({}, 'symbol')

    def test_params_not_mutated(self):
        params = dict(self.ORDER)

        validate_params(params, self.ORDER_REQUIRED)

        assert params == self.ORDER
