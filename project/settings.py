"""
Django settings for the Daraja STK push demo project.
M-Pesa credentials come from the environment, see daraja/conf.py.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-change-me")
DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "daraja",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "project.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "project.wsgi.application"

# Signed-cookie sessions keep the demo free of a database
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
MESSAGE_STORAGE = "django.contrib.messages.storage.cookie.CookieStorage"
DATABASES = {}

STATIC_URL = "static/"
USE_TZ = True
TIME_ZONE = os.environ.get("TIME_ZONE", "Africa/Nairobi")

# M-Pesa
MPESA_ENV = os.environ.get("MPESA_ENV", "sandbox")
MPESA_CONSUMER_KEY = os.environ.get("MPESA_CONSUMER_KEY", "")
MPESA_CONSUMER_SECRET = os.environ.get("MPESA_CONSUMER_SECRET", "")
MPESA_CALLBACK_URL = os.environ.get("MPESA_CALLBACK_URL", "https://mydomain.com/path")
if os.environ.get("MPESA_SHORTCODE"):
    MPESA_SHORTCODE = os.environ["MPESA_SHORTCODE"]
if os.environ.get("MPESA_PASSKEY"):
    MPESA_PASSKEY = os.environ["MPESA_PASSKEY"]
MPESA_PARTY_B = os.environ.get("MPESA_PARTY_B", "")
MPESA_TIMEOUT = float(os.environ.get("MPESA_TIMEOUT", "30"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "daraja": {
            "handlers": ["console"],
            "level": os.environ.get("DARAJA_LOG_LEVEL", "INFO"),
        },
    },
}
