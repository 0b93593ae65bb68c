# daraja/conf.py

from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from daraja.mpesa.service import BASE_URLS, DEFAULT_TIMEOUT

# Safaricom's public sandbox paybill
SANDBOX_SHORTCODE = "174379"
SANDBOX_PASSKEY = "bfb279f9aa9bdbcf158e97dd71a467cd2e0c893059b10f78e6b72ada1ed2c919"


@dataclass(frozen=True)
class DarajaConfig:
    environment: str
    consumer_key: str
    consumer_secret: str
    shortcode: str
    passkey: str
    party_b: str
    callback_url: str
    account_reference: str
    transaction_desc: str
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self):
        return BASE_URLS[self.environment]


def get_daraja_config():
    """
    Read the MPESA_* settings. The sandbox falls back to the public test
    shortcode/passkey; production needs them set explicitly.
    """
    environment = getattr(settings, "MPESA_ENV", "sandbox")
    if environment not in BASE_URLS:
        raise ImproperlyConfigured(
            f"MPESA_ENV must be one of {sorted(BASE_URLS)}, got {environment!r}"
        )

    if environment == "sandbox":
        shortcode = str(getattr(settings, "MPESA_SHORTCODE", SANDBOX_SHORTCODE))
        passkey = getattr(settings, "MPESA_PASSKEY", SANDBOX_PASSKEY)
    else:
        shortcode = str(getattr(settings, "MPESA_SHORTCODE", ""))
        passkey = getattr(settings, "MPESA_PASSKEY", "")

    required = {
        "MPESA_CONSUMER_KEY": getattr(settings, "MPESA_CONSUMER_KEY", ""),
        "MPESA_CONSUMER_SECRET": getattr(settings, "MPESA_CONSUMER_SECRET", ""),
        "MPESA_SHORTCODE": shortcode,
        "MPESA_PASSKEY": passkey,
        "MPESA_CALLBACK_URL": getattr(settings, "MPESA_CALLBACK_URL", ""),
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        raise ImproperlyConfigured(f"Missing M-Pesa settings: {', '.join(missing)}")

    return DarajaConfig(
        environment=environment,
        consumer_key=required["MPESA_CONSUMER_KEY"],
        consumer_secret=required["MPESA_CONSUMER_SECRET"],
        shortcode=shortcode,
        passkey=passkey,
        party_b=str(getattr(settings, "MPESA_PARTY_B", "") or shortcode),
        callback_url=required["MPESA_CALLBACK_URL"],
        account_reference=getattr(settings, "MPESA_ACCOUNT_REFERENCE", "Dlight"),
        transaction_desc=getattr(settings, "MPESA_TRANSACTION_DESC", "Dlight STK PUSH"),
        timeout=getattr(settings, "MPESA_TIMEOUT", DEFAULT_TIMEOUT),
    )
