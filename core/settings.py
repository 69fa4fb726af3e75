"""
Django settings for the earnings dashboard backend.
All secrets and endpoints come from environment variables.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-dev-only")
DEBUG = os.getenv("DJANGO_DEBUG", "true").lower() == "true"
ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "apps.earnings",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

STATIC_URL = "static/"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

USE_TZ = True
TIME_ZONE = "UTC"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Ferrer Studio Earnings API",
    "DESCRIPTION": "PayPal earnings aggregation and transaction drill-down",
    "VERSION": "1.0.0",
}

# PayPal
PAYPAL_ACCESS_TOKEN = os.getenv("PAYPAL_ACCESS_TOKEN", "")
PAYPAL_ENVIRONMENT = os.getenv("PAYPAL_ENVIRONMENT", "SANDBOX").upper()
PAYPAL_BASE_URLS = {
    "SANDBOX": "https://api-m.sandbox.paypal.com",
    "PRODUCTION": "https://api-m.paypal.com",
}
PAYPAL_REQUEST_TIMEOUT = int(os.getenv("PAYPAL_REQUEST_TIMEOUT", "30"))

# Exchange rates (USD based)
EXCHANGE_RATES_URL = os.getenv("EXCHANGE_RATES_URL", "https://api.exchangerate-api.com/v4/latest")
EXCHANGE_RATES_PROVIDER = os.getenv("EXCHANGE_RATES_PROVIDER", "exchange_rate_api")
EXCHANGE_RATES_CACHE_TTL = int(os.getenv("EXCHANGE_RATES_CACHE_TTL", "3600"))

# Payer name PayPal reports for internal movements and withdrawals
INTERNAL_TRANSFER_SENTINEL = os.getenv("INTERNAL_TRANSFER_SENTINEL", "N/A")

# Celery
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/0")
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "apps.earnings": {
            "handlers": ["console"],
            "level": os.getenv("EARNINGS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
