"""Loose-object storage: zlib-compressed canonical bytes keyed by SHA-1."""
import logging
import os
import zlib

from . import codec
from .errors import CorruptObject, MalformedObject, ObjectNotFound, StoreWriteError
from .hashing import hexdigest, is_hexsha

logger = logging.getLogger(__name__)

HEAD_CONTENTS = "ref: refs/heads/master\n"


def init_repository(worktree, git_dir=".git"):
    repo_dir = os.path.join(worktree, git_dir)
    existed = os.path.isdir(repo_dir)
    try:
        os.makedirs(os.path.join(repo_dir, "objects"), exist_ok=True)
        os.makedirs(os.path.join(repo_dir, "refs"), exist_ok=True)
        with open(os.path.join(repo_dir, "HEAD"), "w") as f:
            f.write(HEAD_CONTENTS)
    except OSError as err:
        raise StoreWriteError(f"cannot initialize repository in {repo_dir}: {err}") from err
    if existed:
        logger.info("Reinitialized existing repository in %s", repo_dir)
    else:
        logger.info("Initialized repository in %s", repo_dir)
    return repo_dir, existed


class ObjectStore:
    def __init__(self, objects_dir):
        self.objects_dir = objects_dir

    @classmethod
    def for_worktree(cls, worktree, git_dir=".git"):
        return cls(os.path.join(worktree, git_dir, "objects"))

    def path_for(self, sha):
        if not is_hexsha(sha):
            raise ObjectNotFound(f"not a valid object name {sha!r}")
        sha = sha.lower()
        return os.path.join(self.objects_dir, sha[:2], sha[2:])

    def exists(self, sha):
        return is_hexsha(sha) and os.path.isfile(self.path_for(sha))

    def put(self, sha, data):
        path = self.path_for(sha)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            compressed = zlib.compress(data)
            with open(path, "wb") as f:
                f.write(compressed)
        except (OSError, zlib.error) as err:
            raise StoreWriteError(f"failed to write object {sha} to {path}: {err}") from err
        logger.debug("wrote object %s (%d bytes)", sha, len(data))

    def get(self, sha):
        path = self.path_for(sha)
        if not os.path.isfile(path):
            raise ObjectNotFound(f"object {sha} not found")
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as err:
            raise CorruptObject(f"failed to read object {sha} from {path}: {err}") from err
        try:
            return zlib.decompress(raw)
        except zlib.error as err:
            raise CorruptObject(f"failed to decompress object {sha}: {err}") from err

    def write_object(self, data):
        sha = hexdigest(data)
        self.put(sha, data)
        return sha

    def read_object(self, sha):
        try:
            return codec.decode_header(self.get(sha))
        except MalformedObject as err:
            raise MalformedObject(f"object {sha}: {err}") from err

    def iter_objects(self):
        if not os.path.isdir(self.objects_dir):
            return
        for dir_prefix in sorted(os.listdir(self.objects_dir)):
            dir_path = os.path.join(self.objects_dir, dir_prefix)
            if len(dir_prefix) != 2 or not os.path.isdir(dir_path):
                continue
            for file_name in sorted(os.listdir(dir_path)):
                sha = dir_prefix + file_name
                if is_hexsha(sha):
                    yield sha
