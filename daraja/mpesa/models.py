# daraja/mpesa/models.py
"""
Wire models for the Daraja STK push API.

Field names are snake_case in Python; to_payload()/from_json() translate
to and from the names the gateway uses.
"""

from dataclasses import dataclass, field

TRANSACTION_TYPE_PAYBILL = "CustomerPayBillOnline"


@dataclass(frozen=True)
class STKPushRequest:
    business_short_code: str
    password: str
    timestamp: str
    amount: str
    party_a: str
    party_b: str
    phone_number: str
    callback_url: str
    account_reference: str
    transaction_desc: str
    transaction_type: str = TRANSACTION_TYPE_PAYBILL

    def to_payload(self):
        return {
            "BusinessShortCode": self.business_short_code,
            "Password": self.password,
            "Timestamp": self.timestamp,
            "TransactionType": self.transaction_type,
            "Amount": self.amount,
            "PartyA": self.party_a,
            "PartyB": self.party_b,
            "PhoneNumber": self.phone_number,
            "CallBackURL": self.callback_url,
            "AccountReference": self.account_reference,
            "TransactionDesc": self.transaction_desc,
        }


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    expires_in: int = 0

    @classmethod
    def from_json(cls, data):
        # The gateway sends expires_in as a string ("3599")
        return cls(
            access_token=data["access_token"],
            expires_in=int(data.get("expires_in") or 0),
        )


@dataclass(frozen=True)
class STKPushResponse:
    merchant_request_id: str = None
    checkout_request_id: str = None
    response_code: str = None
    response_description: str = None
    customer_message: str = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, data):
        return cls(
            merchant_request_id=data.get("MerchantRequestID"),
            checkout_request_id=data.get("CheckoutRequestID"),
            response_code=data.get("ResponseCode"),
            response_description=data.get("ResponseDescription"),
            customer_message=data.get("CustomerMessage"),
            raw=data,
        )
