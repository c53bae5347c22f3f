"""
Django settings for the folio project.
Django 5.2.x
"""

from __future__ import annotations

import os

import dj_database_url

from config.env import BASE_DIR, env

# ------------------------------------------------------------------------------
# Core
# ------------------------------------------------------------------------------
# Tip: set DJANGO_SECRET_KEY in prod to a long, random value (>= 50 chars).
SECRET_KEY = env("DJANGO_SECRET_KEY", default="dev-secret-unsafe-DO_NOT_USE_IN_PRODUCTION")

# Local dev defaults to DEBUG=True; in CI/prod set DJANGO_DEBUG=0
_ci_default = "0" if os.getenv("GITHUB_ACTIONS") else "1"
DEBUG: bool = env("DJANGO_DEBUG", default=_ci_default, cast=bool)

ALLOWED_HOSTS = env(
    "ALLOWED_HOSTS",
    default=".onrender.com,127.0.0.1,localhost,testserver",
    cast=list,
)

CSRF_TRUSTED_ORIGINS = env(
    "CSRF_TRUSTED_ORIGINS",
    default="https://*.onrender.com",
    cast=list,
)

# ------------------------------------------------------------------------------
# Security (kept strict when DEBUG=False, lenient in dev)
# ------------------------------------------------------------------------------
if not DEBUG:
    SECURE_SSL_REDIRECT = True
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

    SECURE_HSTS_SECONDS = env("SECURE_HSTS_SECONDS", default=60 * 60 * 24 * 365, cast=int)
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True

    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
else:
    SECURE_SSL_REDIRECT = False
    SECURE_PROXY_SSL_HEADER = None
    SECURE_HSTS_SECONDS = 0
    SECURE_HSTS_INCLUDE_SUBDOMAINS = False
    SECURE_HSTS_PRELOAD = False

SESSION_COOKIE_SAMESITE = "Lax"
CSRF_COOKIE_SAMESITE = "Lax"
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

# ------------------------------------------------------------------------------
# Apps
# ------------------------------------------------------------------------------
INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",

    # WhiteNoise: keep *before* staticfiles
    "whitenoise.runserver_nostatic",

    "django.contrib.staticfiles",

    # Project apps
    "portfolio.apps.PortfolioConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "folio.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
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

WSGI_APPLICATION = "folio.wsgi.application"

# ------------------------------------------------------------------------------
# Database
# ------------------------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "")

if DATABASE_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DATABASE_URL,
            conn_max_age=600,
            ssl_require=os.getenv("DJANGO_DB_SSL") == "1",
        )
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

# ------------------------------------------------------------------------------
# Auth
# ------------------------------------------------------------------------------
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "portfolio:dashboard"
LOGOUT_REDIRECT_URL = "login"

# ------------------------------------------------------------------------------
# i18n / tz
# ------------------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ------------------------------------------------------------------------------
# Static & media
# ------------------------------------------------------------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

STATICFILES_DIRS = [p for p in [BASE_DIR / "static"] if p.exists()]

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",  # media
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ------------------------------------------------------------------------------
# Portfolio backends
# ------------------------------------------------------------------------------
# "orm" keeps records in DATABASES and uploads in default_storage;
# "supabase" talks to a Supabase project over its REST APIs.
PORTFOLIO_BACKEND = env("PORTFOLIO_BACKEND", default="orm")

SUPABASE_URL = env("SUPABASE_URL", default="")
SUPABASE_KEY = env("SUPABASE_KEY", default="")
SUPABASE_TIMEOUT = env("SUPABASE_TIMEOUT", default=10, cast=int)

PORTFOLIO_PROJECT_BUCKET = env("PORTFOLIO_PROJECT_BUCKET", default="project-images")
PORTFOLIO_PROFILE_BUCKET = env("PORTFOLIO_PROFILE_BUCKET", default="profile-images")

PORTFOLIO_DEFAULT_CONTACT_LINK = env("PORTFOLIO_DEFAULT_CONTACT_LINK", default="https://t.me/yourusername")
# static path, resolved with {% static %}
PORTFOLIO_DEFAULT_PROFILE_IMAGE = "portfolio/img/profile.svg"

# ------------------------------------------------------------------------------
# Logging (simple, quiet by default)
# ------------------------------------------------------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {"format": "[{levelname}] {asctime} {name} - {message}", "style": "{"},
        "simple": {"format": "[{levelname}] {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "INFO", "propagate": True},
        "app": {"handlers": ["console"], "level": env("APP_LOG_LEVEL", default="INFO")},
    },
}
