"""Blob, tree and commit builders writing through an ObjectStore."""
import logging
import os
from concurrent.futures import ThreadPoolExecutor

from . import codec
from .codec import MODE_DIR, MODE_FILE, TreeEntry
from .errors import BuildFailed, InvalidArguments, TinyGitError
from .hashing import hexdigest, is_hexsha

logger = logging.getLogger(__name__)


def hash_file(store, path, write=True):
    """Encode the file at ``path`` as a blob and return its hex digest.

    The whole file is read into memory. Nothing is stored when ``write``
    is false.
    """
    with open(path, "rb") as f:
        content = f.read()
    data = codec.encode_blob(content)
    if not write:
        return hexdigest(data)
    return store.write_object(data)


def _git_sort_key(entry):
    # git compares directory names as if they ended with "/"
    name = entry.name.encode("utf-8", "surrogateescape")
    return name + b"/" if entry.is_tree else name


class TreeBuilder:
    """Snapshot a directory into tree and blob objects, depth first.

    The metadata directory named ``skip_name`` is left out of the top-level
    tree only. With ``max_workers`` above one, the files of each directory
    are hashed on a thread pool; the resulting digest does not change.
    """

    def __init__(self, store, skip_name=".git", max_workers=1):
        self.store = store
        self.skip_name = skip_name
        self.max_workers = max_workers

    def write_tree(self, directory):
        if self.max_workers > 1:
            with ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="tree-blobs",
            ) as executor:
                sha = self._write_tree(directory, executor, root=True)
        else:
            sha = self._write_tree(directory, None, root=True)
        logger.info("wrote tree %s for %s", sha, directory)
        return sha

    def _hash_blob(self, path):
        try:
            return hash_file(self.store, path)
        except (OSError, TinyGitError) as err:
            raise BuildFailed(f"failed to hash blob {path}: {err}") from err

    def _write_tree(self, directory, executor, root=False):
        subdirs = []
        files = []
        try:
            with os.scandir(directory) as it:
                for dir_entry in it:
                    if root and dir_entry.name == self.skip_name:
                        continue
                    if dir_entry.is_dir(follow_symlinks=False):
                        subdirs.append(dir_entry)
                    elif dir_entry.is_file():
                        files.append(dir_entry)
                    else:
                        logger.debug("skipping %s: not a regular file", dir_entry.path)
        except OSError as err:
            raise BuildFailed(f"failed to read directory {directory}: {err}") from err

        entries = []
        for dir_entry in subdirs:
            sha = self._write_tree(dir_entry.path, executor)
            entries.append(TreeEntry(MODE_DIR, dir_entry.name, bytes.fromhex(sha)))

        paths = [dir_entry.path for dir_entry in files]
        if executor is None:
            shas = [self._hash_blob(path) for path in paths]
        else:
            shas = list(executor.map(self._hash_blob, paths))
        for dir_entry, sha in zip(files, shas):
            entries.append(TreeEntry(MODE_FILE, dir_entry.name, bytes.fromhex(sha)))

        entries.sort(key=_git_sort_key)
        try:
            return self.store.write_object(codec.encode_tree(entries))
        except TinyGitError as err:
            raise BuildFailed(f"failed to write tree for {directory}: {err}") from err


def commit_tree(store, tree_sha, parent_sha, message, author, committer=None):
    if not is_hexsha(tree_sha):
        raise InvalidArguments(f"not a valid tree name {tree_sha!r}")
    if parent_sha is not None and not is_hexsha(parent_sha):
        raise InvalidArguments(f"not a valid parent name {parent_sha!r}")
    data = codec.encode_commit(
        tree_sha.lower(),
        parent_sha.lower() if parent_sha else None,
        message,
        author,
        committer or author,
    )
    sha = store.write_object(data)
    logger.info("wrote commit %s for tree %s", sha, tree_sha)
    return sha
