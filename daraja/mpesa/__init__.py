# daraja/mpesa/__init__.py

from .driver import DarajaDriver, IDriver
from .models import AccessToken, STKPushRequest, STKPushResponse
from .resource import Resource, safe_api_call
from .state import DarajaState
from .stk_push import build_stk_push_request, lipa_na_mpesa_stk_push
from .utils import generate_stk_password, generate_timestamp, sanitize_phone_number

__all__ = [
    'DarajaDriver',
    'IDriver',
    'AccessToken',
    'STKPushRequest',
    'STKPushResponse',
    'Resource',
    'safe_api_call',
    'DarajaState',
    'build_stk_push_request',
    'lipa_na_mpesa_stk_push',
    'generate_stk_password',
    'generate_timestamp',
    'sanitize_phone_number',
]
