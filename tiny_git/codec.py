"""Canonical byte layout of blob, tree and commit objects.

Every object is stored as ``b"<kind> <len>\\0" + body``. The helpers here
only transform bytes; hashing and persistence live in ``hashing`` and
``store``.
"""
from collections import namedtuple

from .errors import MalformedObject
from .hashing import DIGEST_SIZE

BLOB = "blob"
TREE = "tree"
COMMIT = "commit"
KINDS = (BLOB, TREE, COMMIT)

MODE_FILE = "100644"
MODE_DIR = "40000"


class TreeEntry(namedtuple("TreeEntry", ["mode", "name", "sha"])):
    __slots__ = ()

    @property
    def hexsha(self):
        return self.sha.hex()

    @property
    def is_tree(self):
        return self.mode == MODE_DIR

    @property
    def kind(self):
        return TREE if self.is_tree else BLOB


Commit = namedtuple("Commit", ["tree", "parents", "author", "committer", "message"])


def encode(kind, body):
    if kind not in KINDS:
        raise MalformedObject(f"unknown object type {kind!r}")
    return f"{kind} {len(body)}\0".encode() + body


def encode_blob(data):
    return encode(BLOB, data)


def encode_tree(entries):
    parts = []
    for entry in entries:
        if "\0" in entry.name or "/" in entry.name or not entry.name:
            raise MalformedObject(f"invalid tree entry name {entry.name!r}")
        if len(entry.sha) != DIGEST_SIZE:
            raise MalformedObject(
                f"tree entry {entry.name!r} has a {len(entry.sha)}-byte digest"
            )
        header = f"{entry.mode} {entry.name}\0".encode("utf-8", "surrogateescape")
        parts.append(header + entry.sha)
    return encode(TREE, b"".join(parts))


def encode_commit(tree_hex, parent_hex, message, author, committer):
    lines = [f"tree {tree_hex}"]
    if parent_hex:
        lines.append(f"parent {parent_hex}")
    lines.append(f"author {author}")
    lines.append(f"committer {committer}")
    body = "\n".join(lines) + "\n\n" + message
    return encode(COMMIT, body.encode())


def decode_header(raw):
    """Split canonical bytes into ``(kind, body)``."""
    null_index = raw.find(b"\0")
    if null_index < 0:
        raise MalformedObject("object header is not NUL-terminated")
    header = raw[:null_index].decode("ascii", errors="replace").strip()
    body = raw[null_index + 1:]

    kind, _, size = header.partition(" ")
    if kind not in KINDS:
        raise MalformedObject(f"unknown object type {kind!r}")
    if not size.isdigit():
        raise MalformedObject(f"bad object length {size!r}")
    if int(size) != len(body):
        raise MalformedObject(
            f"{kind} header says {size} bytes but body has {len(body)}"
        )
    return kind, body


def decode_tree_entries(body):
    entries = []
    pos = 0
    while pos < len(body):
        null_index = body.find(b"\0", pos)
        if null_index < 0:
            raise MalformedObject(f"truncated tree entry at offset {pos}")
        mode, sep, name = body[pos:null_index].decode("utf-8", "surrogateescape").partition(" ")
        if not sep:
            raise MalformedObject(f"tree entry at offset {pos} has no mode")
        sha = body[null_index + 1:null_index + 1 + DIGEST_SIZE]
        if len(sha) != DIGEST_SIZE:
            raise MalformedObject(f"tree entry {name!r} has a truncated digest")
        entries.append(TreeEntry(mode, name, sha))
        pos = null_index + 1 + DIGEST_SIZE
    return entries


def decode_commit(body):
    text = body.decode("utf-8", errors="replace")
    header, _, message = text.partition("\n\n")
    fields = {"tree": None, "parents": [], "author": None, "committer": None}
    for line in header.splitlines():
        key, _, value = line.partition(" ")
        if key == "parent":
            fields["parents"].append(value)
        elif key in fields:
            fields[key] = value
    if fields["tree"] is None:
        raise MalformedObject("commit has no tree")
    return Commit(message=message, **fields)
