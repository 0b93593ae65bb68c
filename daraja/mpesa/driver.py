# daraja/mpesa/driver.py

import abc
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

from daraja.mpesa.resource import Error, Loading, Success, safe_api_call
from daraja.mpesa.service import SANDBOX_BASE_URL, STKPushService
from daraja.mpesa.state import DarajaState, MutableStateFlow
from daraja.mpesa.utils import basic_auth_header, mask_secret

logger = logging.getLogger(__name__)

AUTHENTICATING = "Authenticating"
AUTHENTICATED = "Successfully Authenticated"
SENDING_OTP = "Sending Otp request"
AUTH_FAILED_FALLBACK = "Something went wrong"
PUSH_FAILED_FALLBACK = "Makosha!"
PUSH_SENT_FALLBACK = "Request sent successfully"


def _error_text(resource, fallback):
    if resource.error_message:
        return resource.error_message
    if resource.error is not None and str(resource.error):
        return str(resource.error)
    return fallback


class IDriver(abc.ABC):

    @abc.abstractmethod
    def perform_stk_push(self, stk_push_request):
        """Start an STK push; progress is published on daraja_state."""


class DarajaDriver(IDriver):
    """
    Runs the Lipa na M-Pesa Online flow: get an access token (unless one is
    cached), then send the STK push with it.

    perform_stk_push() returns immediately. The flow runs on an I/O worker
    and every outcome is reduced into ``daraja_state``; nothing is raised to
    the caller. State writes all happen on one dedicated thread, so flows
    running side by side can interleave their messages but never tear a
    state. Flows are never cancelled; close() waits for them.
    """

    def __init__(self, consumer_key, consumer_secret, service=None,
                 base_url=SANDBOX_BASE_URL, max_workers=None, clock=time.monotonic):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._service = service or STKPushService(base_url)
        self._clock = clock

        self._daraja_state = MutableStateFlow(DarajaState())
        self._read_only_state = self._daraja_state.as_state_flow()

        self._io = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="daraja-io")
        self._single_thread = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mvi")

        # Read-then-written without a lock: two flows started together may
        # both fetch a token, the last one wins.
        self._bearer_token = None
        self._token_expires_at = None

    @property
    def daraja_state(self):
        return self._read_only_state

    @property
    def bearer_token(self):
        """The cached token, or None when absent or expired."""
        if self._bearer_token is None:
            return None
        if self._token_expires_at is not None and self._clock() >= self._token_expires_at:
            logger.info("Access token expired, a new one will be requested")
            self._bearer_token = None
            self._token_expires_at = None
        return self._bearer_token

    def perform_stk_push(self, stk_push_request):
        self._intent(lambda: self._stk_push(stk_push_request))

    def _stk_push(self, stk_push_request):
        if self.bearer_token is None:
            for access_token_response in self.get_access_token():
                if isinstance(access_token_response, Error):
                    message = _error_text(access_token_response, AUTH_FAILED_FALLBACK)
                    logger.warning("Authentication failed: %s", message)
                    self._reduce(lambda state: replace(state, message=message, is_loading=False))
                elif isinstance(access_token_response, Loading):
                    self._reduce(lambda state: replace(state, message=AUTHENTICATING, is_loading=True))
                elif isinstance(access_token_response, Success):
                    self._reduce(lambda state: replace(state, message=AUTHENTICATED, is_loading=False))
                    self._cache_token(access_token_response.data)

        token = self.bearer_token
        if token is None:
            return

        for send_otp_response in self.send_otp(token, stk_push_request):
            if isinstance(send_otp_response, Error):
                message = _error_text(send_otp_response, PUSH_FAILED_FALLBACK)
                logger.warning("STK push failed: %s", message)
                self._reduce(lambda state: replace(state, message=message, is_loading=False))
            elif isinstance(send_otp_response, Loading):
                self._reduce(lambda state: replace(state, message=SENDING_OTP, is_loading=True))
            elif isinstance(send_otp_response, Success):
                message = send_otp_response.data.customer_message or PUSH_SENT_FALLBACK
                self._reduce(lambda state: replace(state, message=message, is_loading=False))

    def get_access_token(self):
        yield Loading()
        authorization = basic_auth_header(self._consumer_key, self._consumer_secret)
        yield safe_api_call(lambda: self._service.access_token(authorization))

    def send_otp(self, token, stk_push_request):
        yield Loading()
        yield safe_api_call(lambda: self._service.send_push(stk_push_request, f"Bearer {token}"))

    def _cache_token(self, access_token):
        self._bearer_token = access_token.access_token
        if access_token.expires_in:
            self._token_expires_at = self._clock() + access_token.expires_in
        else:
            self._token_expires_at = None
        logger.info("Authenticated, token %s valid for %ss",
                    mask_secret(self._bearer_token), access_token.expires_in or "?")

    def _intent(self, transform):
        try:
            future = self._io.submit(transform)
        except RuntimeError:
            logger.error("Driver is closed, STK push dropped")
            return
        future.add_done_callback(_log_unexpected_failure)

    def _reduce(self, reducer):
        """
        This reducer reduces state in a single thread context to avoid race
        conditions on the state when more than one thread is changing it.
        """
        self._single_thread.submit(self._apply, reducer).result()

    def _apply(self, reducer):
        self._daraja_state.value = reducer(self._daraja_state.value)

    def close(self, wait=True):
        """
        Stop taking new pushes, let running flows finish, then release the
        workers and the HTTP session. With wait=False the release happens on
        a background thread and close() returns straight away.
        """
        if not wait:
            self._io.shutdown(wait=False)
            threading.Thread(target=self.close, name="daraja-close", daemon=True).start()
            return
        self._io.shutdown(wait=True)
        self._single_thread.shutdown(wait=True)
        self._service.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _log_unexpected_failure(future):
    error = future.exception()
    if error is not None:
        logger.error("STK push flow crashed", exc_info=error)
