"""
Yardımcı Araçlar Modülü

Loglama ve yardımcı fonksiyonlar.
"""

from src.utils.logger import setup_logger, setup_logger_from_config, get_logger
from src.utils.helpers import current_timestamp_ms, format_param_value, mask_key

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_logger',
    'current_timestamp_ms',
    'format_param_value',
    'mask_key'
]
