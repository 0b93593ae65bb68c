# daraja/mpesa/service.py

import logging
from urllib.parse import urljoin

import requests

from daraja.mpesa.exceptions import GatewayError
from daraja.mpesa.models import AccessToken, STKPushResponse

logger = logging.getLogger(__name__)

SANDBOX_BASE_URL = "https://sandbox.safaricom.co.ke/"
PRODUCTION_BASE_URL = "https://api.safaricom.co.ke/"

BASE_URLS = {
    "sandbox": SANDBOX_BASE_URL,
    "production": PRODUCTION_BASE_URL,
}

ACCESS_TOKEN_PATH = "oauth/v1/generate"
STK_PUSH_PATH = "mpesa/stkpush/v1/processrequest"

DEFAULT_TIMEOUT = 30


def log_response(response, *args, **kwargs):
    """requests response hook: log each exchange, never the Authorization header"""
    request = response.request
    logger.debug("--> %s %s", request.method, request.url)
    logger.debug("<-- %s %s (%.0fms)", response.status_code, response.url,
                 response.elapsed.total_seconds() * 1000)
    return response


def _error_message(response):
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason, {}
    if not isinstance(body, dict):
        return response.text, {}
    message = (
        body.get("errorMessage")
        or body.get("ResponseDescription")
        or response.text
        or response.reason
    )
    return message, body


class STKPushService:
    """
    The two Daraja calls used for Lipa na M-Pesa Online.
    Failures raise: GatewayError when the gateway answered with an error,
    requests.RequestException when it couldn't be reached.
    """

    def __init__(self, base_url=SANDBOX_BASE_URL, session=None, timeout=DEFAULT_TIMEOUT):
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        response_hooks = self.session.hooks.setdefault("response", [])
        if log_response not in response_hooks:
            response_hooks.append(log_response)

    def access_token(self, authorization):
        response = self.session.get(
            urljoin(self.base_url, ACCESS_TOKEN_PATH),
            params={"grant_type": "client_credentials"},
            headers={"Authorization": authorization},
            timeout=self.timeout,
        )
        body = self._json(response)
        try:
            return AccessToken.from_json(body)
        except (KeyError, TypeError, ValueError) as e:
            raise GatewayError(f"Malformed access token response: {e}",
                               status_code=response.status_code, payload=body)

    def send_push(self, stk_push_request, authorization):
        response = self.session.post(
            urljoin(self.base_url, STK_PUSH_PATH),
            json=stk_push_request.to_payload(),
            headers={"Authorization": authorization},
            timeout=self.timeout,
        )
        body = self._json(response)
        if not isinstance(body, dict):
            raise GatewayError("Malformed STK push response",
                               status_code=response.status_code)
        push_response = STKPushResponse.from_json(body)
        if push_response.response_code not in (None, "0"):
            raise GatewayError(
                push_response.response_description or "STK push rejected",
                payload=body,
            )
        logger.info("STK push accepted, CheckoutRequestID: %s",
                    push_response.checkout_request_id)
        return push_response

    def close(self):
        self.session.close()

    @staticmethod
    def _json(response):
        if not response.ok:
            message, body = _error_message(response)
            logger.warning("Gateway error %s: %s", response.status_code, message)
            raise GatewayError(message, status_code=response.status_code, payload=body)
        try:
            return response.json()
        except ValueError:
            raise GatewayError("Invalid JSON in gateway response",
                               status_code=response.status_code)
