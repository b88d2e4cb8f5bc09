# direito/security/__init__.py
"""
Seguranca dos endpoints HTTP: error shield, validacao de body e limite
diario por cliente.
"""
from direito.security.error_shield import safe_handler
from direito.security.rate_limit import client_ip, daily_limit
from direito.security.validation import validate_json_body, validate_text_field

__all__ = [
    "safe_handler",
    "client_ip",
    "daily_limit",
    "validate_json_body",
    "validate_text_field",
]
