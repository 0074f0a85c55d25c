import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "django_core.settings")
django.setup()

from tiny_git.store import ObjectStore, init_repository  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("TINY_GIT_") or name in ("LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store(tmp_path):
    init_repository(str(tmp_path))
    return ObjectStore.for_worktree(str(tmp_path))


@pytest.fixture
def worktree(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path
