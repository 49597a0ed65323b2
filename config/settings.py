"""Django settings for the revenue service.

Values come from environment variables; defaults are for local development
and tests.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() == "true"
ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "revenue.apps.RevenueConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DATABASE_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "UTC"
STATIC_URL = "static/"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_AUTHENTICATION_CLASSES": [],
}

REVENUE = {
    "ENVIRONMENT": os.environ.get("PAYMENT_ENVIRONMENT", "sandbox"),
    "SQUARE_ACCESS_TOKEN": os.environ.get("SQUARE_ACCESS_TOKEN", ""),
    "SQUARE_LOCATION_ID": os.environ.get("SQUARE_LOCATION_ID", ""),
    "SQUARE_API_VERSION": os.environ.get("SQUARE_API_VERSION", "2024-05-15"),
    "GATEWAY_TIMEOUT_SECONDS": float(os.environ.get("GATEWAY_TIMEOUT_SECONDS", "10")),
    "LEDGER_EPOCH": os.environ.get("LEDGER_EPOCH", "2025-05-24T00:00:00Z"),
    "PARTNER_SHARE": os.environ.get("PARTNER_SHARE", "0.70"),
    "SECTOR_PARTNER_SHARES": {},
    "PRICE_TABLE": {},
    "MIN_OPEN_AMOUNT": int(os.environ.get("MIN_OPEN_AMOUNT", "100")),
    "FESTIVAL_RECIPIENT": os.environ.get("FESTIVAL_RECIPIENT", "Playhouse West"),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
        },
    },
    "loggers": {
        "revenue": {
            "handlers": ["console"],
            "level": os.environ.get("REVENUE_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
