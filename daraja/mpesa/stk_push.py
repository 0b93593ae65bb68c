# daraja/mpesa/stk_push.py

import logging
from functools import lru_cache

from daraja.mpesa.driver import DarajaDriver
from daraja.mpesa.models import TRANSACTION_TYPE_PAYBILL, STKPushRequest
from daraja.mpesa.service import STKPushService
from daraja.mpesa.utils import generate_stk_password, generate_timestamp, sanitize_phone_number

logger = logging.getLogger(__name__)


def build_stk_push_request(amount, phone_number, config=None, timestamp=None):
    """
    Build the STK push request for one submission.
    Amount and phone are not validated, the gateway rejects bad input.
    """
    if config is None:
        from daraja.conf import get_daraja_config
        config = get_daraja_config()

    timestamp = timestamp or generate_timestamp()
    phone = sanitize_phone_number(phone_number)

    return STKPushRequest(
        business_short_code=config.shortcode,
        password=generate_stk_password(config.shortcode, config.passkey, timestamp),
        timestamp=timestamp,
        transaction_type=TRANSACTION_TYPE_PAYBILL,
        amount=amount,
        party_a=phone,
        party_b=config.party_b,
        phone_number=phone,
        callback_url=config.callback_url,
        account_reference=config.account_reference,
        transaction_desc=config.transaction_desc,
    )


@lru_cache(maxsize=None)
def get_driver():
    """Process-wide driver, so the access token and state outlive a request"""
    from daraja.conf import get_daraja_config
    config = get_daraja_config()
    logger.info("Creating Daraja driver for %s (%s)", config.environment, config.base_url)
    return DarajaDriver(
        consumer_key=config.consumer_key,
        consumer_secret=config.consumer_secret,
        service=STKPushService(config.base_url, timeout=config.timeout),
    )


def lipa_na_mpesa_stk_push(phone, amount, driver=None, config=None):
    """
    Initiate M-Pesa STK Push using the provided phone number.
    Returns the request that was sent; follow progress on driver.daraja_state.
    """
    driver = driver or get_driver()
    stk_push_request = build_stk_push_request(amount, phone, config=config)
    logger.info("Initiating STK push: phone=%s amount=%s reference=%s",
                stk_push_request.phone_number, stk_push_request.amount,
                stk_push_request.account_reference)
    driver.perform_stk_push(stk_push_request)
    return stk_push_request
