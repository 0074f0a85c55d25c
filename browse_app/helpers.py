from django.conf import settings
from django.http import Http404

from tiny_git import codec
from tiny_git.errors import ObjectNotFound
from tiny_git.store import ObjectStore


def open_store() -> ObjectStore:
    return ObjectStore.for_worktree(settings.TINY_GIT_ROOT, settings.TINY_GIT_DIR)


def load_object_or_404(store: ObjectStore, sha: str):
    try:
        return store.read_object(sha)
    except ObjectNotFound as err:
        raise Http404(str(err))


def entry_as_dict(entry: codec.TreeEntry):
    return {"mode": entry.mode, "type": entry.kind, "sha": entry.hexsha, "name": entry.name}


def commit_as_dict(commit: codec.Commit):
    return {
        "tree": commit.tree,
        "parents": commit.parents,
        "author": commit.author,
        "committer": commit.committer,
        "message": commit.message,
    }
