import os
import zlib

import pytest

from tiny_git import codec
from tiny_git.errors import CorruptObject, MalformedObject, ObjectNotFound, StoreWriteError
from tiny_git.store import HEAD_CONTENTS, ObjectStore, init_repository

HELLO_SHA = "ce013625030ba8dba906f756967f9e9ca394464a"


def test_init_repository_creates_layout(tmp_path):
    repo_dir, existed = init_repository(str(tmp_path))

    assert existed is False
    assert repo_dir == os.path.join(str(tmp_path), ".git")
    assert (tmp_path / ".git" / "objects").is_dir()
    assert (tmp_path / ".git" / "refs").is_dir()
    assert (tmp_path / ".git" / "HEAD").read_text() == HEAD_CONTENTS == "ref: refs/heads/master\n"


def test_init_repository_twice_is_allowed(tmp_path, store):
    sha = store.write_object(codec.encode_blob(b"keep me"))
    _, existed = init_repository(str(tmp_path))
    assert existed is True
    assert store.exists(sha)


def test_write_object_uses_two_level_layout(tmp_path, store):
    data = codec.encode_blob(b"hello\n")
    sha = store.write_object(data)

    path = tmp_path / ".git" / "objects" / "ce" / HELLO_SHA[2:]
    assert sha == HELLO_SHA
    assert store.path_for(sha) == str(path)
    assert zlib.decompress(path.read_bytes()) == data


def test_get_returns_stored_canonical_bytes(store):
    data = codec.encode_blob(b"some content")
    sha = store.write_object(data)

    assert store.get(sha) == data
    assert store.get(sha.upper()) == data
    assert store.read_object(sha) == ("blob", b"some content")


def test_put_is_idempotent(store):
    data = codec.encode_blob(b"same")
    first = store.write_object(data)
    second = store.write_object(data)

    assert first == second
    assert list(store.iter_objects()) == [first]
    assert store.get(first) == data


def test_get_missing_object(store):
    assert not store.exists(HELLO_SHA)
    with pytest.raises(ObjectNotFound):
        store.get(HELLO_SHA)


def test_get_invalid_object_name(store):
    assert not store.exists("abc")
    with pytest.raises(ObjectNotFound):
        store.get("abc")


def test_truncated_object_is_corrupt(store):
    sha = store.write_object(codec.encode_blob(b"x" * 500))
    path = store.path_for(sha)
    with open(path, "rb") as f:
        raw = f.read()
    with open(path, "wb") as f:
        f.write(raw[: len(raw) // 2])

    with pytest.raises(CorruptObject):
        store.get(sha)


def test_garbage_object_is_corrupt(store):
    os.makedirs(os.path.dirname(store.path_for(HELLO_SHA)), exist_ok=True)
    with open(store.path_for(HELLO_SHA), "wb") as f:
        f.write(b"not zlib at all")

    with pytest.raises(CorruptObject):
        store.read_object(HELLO_SHA)


def test_read_object_reports_malformed_header(store):
    store.put(HELLO_SHA, b"blob 99\x00short")
    with pytest.raises(MalformedObject) as excinfo:
        store.read_object(HELLO_SHA)
    assert HELLO_SHA in str(excinfo.value)


def test_put_failure_is_store_write_error(tmp_path):
    blocker = tmp_path / "objects"
    blocker.write_text("not a directory")
    store = ObjectStore(str(blocker))

    with pytest.raises(StoreWriteError) as excinfo:
        store.write_object(codec.encode_blob(b"hello\n"))
    assert isinstance(excinfo.value.__cause__, OSError)


def test_iter_objects_lists_every_digest(store):
    shas = {store.write_object(codec.encode_blob(str(i).encode())) for i in range(5)}
    assert set(store.iter_objects()) == shas


def test_iter_objects_without_directory(tmp_path):
    assert list(ObjectStore(str(tmp_path / "missing")).iter_objects()) == []
