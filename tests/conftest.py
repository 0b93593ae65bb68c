"""Shared pytest fixtures for the Daraja tests."""
import sys
sys.dont_write_bytecode = True

import django  # noqa: E402
from django.conf import settings  # noqa: E402

import pytest  # noqa: E402

if not settings.configured:
    settings.configure(
        DEBUG=False,
        SECRET_KEY="test-secret-key",
        ALLOWED_HOSTS=["testserver"],
        INSTALLED_APPS=[
            "django.contrib.messages",
            "daraja",
        ],
        MIDDLEWARE=[
            "django.contrib.sessions.middleware.SessionMiddleware",
            "django.middleware.common.CommonMiddleware",
            "django.contrib.messages.middleware.MessageMiddleware",
        ],
        ROOT_URLCONF="project.urls",
        TEMPLATES=[{
            "BACKEND": "django.template.backends.django.DjangoTemplates",
            "APP_DIRS": True,
            "OPTIONS": {
                "context_processors": [
                    "django.template.context_processors.request",
                    "django.contrib.messages.context_processors.messages",
                ],
            },
        }],
        SESSION_ENGINE="django.contrib.sessions.backends.signed_cookies",
        MESSAGE_STORAGE="django.contrib.messages.storage.cookie.CookieStorage",
        DATABASES={},
        USE_TZ=True,
        MPESA_ENV="sandbox",
        MPESA_CONSUMER_KEY="test-consumer-key",
        MPESA_CONSUMER_SECRET="test-consumer-secret",
        MPESA_CALLBACK_URL="https://example.com/mpesa/callback/",
    )
    django.setup()


@pytest.fixture(autouse=True)
def _reset_driver_cache():
    """The process-wide driver is cached; drop it so tests don't share tokens or state."""
    from daraja.mpesa import stk_push

    stk_push.get_driver.cache_clear()
    yield
    stk_push.get_driver.cache_clear()
