"""Test doubles for the Daraja transport."""
import threading

from daraja.mpesa.exceptions import GatewayError
from daraja.mpesa.models import AccessToken, STKPushResponse

CUSTOMER_MESSAGE = "Success. Request accepted for processing"


class FakeSTKPushService:
    """Records calls and answers from canned outcomes.

    token_outcome / push_outcome are either a value to return or an
    exception instance to raise.
    """

    def __init__(self, token_outcome=None, push_outcome=None, delay=0.0):
        self.token_outcome = token_outcome or AccessToken("fake-token", 3599)
        self.push_outcome = push_outcome or STKPushResponse(
            merchant_request_id="29115-34620561-1",
            checkout_request_id="ws_CO_191220191020363925",
            response_code="0",
            response_description="Success. Request accepted for processing",
            customer_message=CUSTOMER_MESSAGE,
        )
        self.delay = delay
        self.token_calls = []
        self.push_calls = []
        self.closed = False
        self._lock = threading.Lock()

    def access_token(self, authorization):
        with self._lock:
            self.token_calls.append(authorization)
        return self._answer(self.token_outcome)

    def send_push(self, stk_push_request, authorization):
        with self._lock:
            self.push_calls.append((stk_push_request, authorization))
        return self._answer(self.push_outcome)

    def close(self):
        self.closed = True

    def _answer(self, outcome):
        if self.delay:
            threading.Event().wait(self.delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def auth_failure(message="Invalid Credentials"):
    return GatewayError(message, status_code=400)


class StateRecorder:
    """Subscriber that keeps every state it is handed."""

    def __init__(self):
        self.states = []
        self._lock = threading.Lock()

    def __call__(self, state):
        with self._lock:
            self.states.append(state)
