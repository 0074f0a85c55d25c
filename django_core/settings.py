"""Django settings for the read-only object browser."""
import os

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "tiny-git-browse-not-secret")
DEBUG = os.getenv("DJANGO_DEBUG", "0").strip().lower() in ("1", "true", "yes", "on")
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]

INSTALLED_APPS = [
    "browse_app",
]
MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": False,
    },
]
ROOT_URLCONF = "django_core.urls"
WSGI_APPLICATION = "django_core.wsgi.application"
DATABASES = {}
USE_TZ = True

TINY_GIT_ROOT = os.getenv("TINY_GIT_ROOT", os.getcwd())
TINY_GIT_DIR = os.getenv("TINY_GIT_DIR", ".git")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s | %(levelname)s | %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "loggers": {
        "tiny_git": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "WARNING").upper()},
    },
}
