# daraja/mpesa/resource.py

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class Resource:
    """Outcome of a remote call: Loading, then Success or Error."""


@dataclass(frozen=True)
class Loading(Resource):
    data: object = None


@dataclass(frozen=True)
class Success(Resource):
    data: object


@dataclass(frozen=True)
class Error(Resource):
    error_message: str = None
    error: BaseException = None


Resource.Loading = Loading
Resource.Success = Success
Resource.Error = Error


def safe_api_call(api_call):
    """
    Run api_call and wrap its outcome. Any exception becomes Resource.Error,
    nothing raised by the transport crosses this boundary.
    """
    try:
        return Success(api_call())
    except Exception as e:
        logger.warning("API call failed: %s", e)
        return Error(error_message=getattr(e, "message", None), error=e)
