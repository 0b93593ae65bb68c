# daraja/mpesa/utils.py

import base64
from datetime import datetime

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
COUNTRY_CODE = "254"


def generate_stk_password(shortcode, passkey, timestamp):
    """
    Generate password for STK push
    Password = Base64(Shortcode + Passkey + Timestamp)
    """
    data_to_encode = f"{shortcode}{passkey}{timestamp}"
    encoded = base64.b64encode(data_to_encode.encode("utf-8"))
    return encoded.decode("utf-8")


def generate_timestamp(now=None):
    """
    Generate timestamp in the format: YYYYMMDDHHmmss (device-local time)
    """
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def sanitize_phone_number(phone):
    """
    Converts a local phone number to the international format (2547xxxxxxx).
    Anything not starting with 0 is passed through unchanged, the gateway
    rejects numbers it can't route.
    """
    if phone.startswith("0"):
        return COUNTRY_CODE + phone[1:]
    return phone


def basic_auth_header(consumer_key, consumer_secret):
    """Authorization header value for the OAuth token call"""
    keys = f"{consumer_key}:{consumer_secret}"
    return "Basic " + base64.b64encode(keys.encode("utf-8")).decode("utf-8")


def mask_secret(value, visible=4):
    """Shorten a secret for log output: 'abcd…'"""
    if not value:
        return "<empty>"
    return f"{value[:visible]}…"
