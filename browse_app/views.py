import logging

from django.http import Http404, HttpRequest, HttpResponse, JsonResponse

from tiny_git import codec
from tiny_git.errors import CorruptObject

from .helpers import commit_as_dict, entry_as_dict, load_object_or_404, open_store

logger = logging.getLogger(__name__)


def _corrupt(err: CorruptObject) -> JsonResponse:
    logger.error("Corrupt object: %s", err)
    return JsonResponse({"error": str(err)}, status=500)


def object_list(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"objects": list(open_store().iter_objects())})


def object_detail(request: HttpRequest, sha: str) -> JsonResponse:
    store = open_store()
    try:
        kind, body = load_object_or_404(store, sha)
        data = {"sha": sha, "type": kind, "size": len(body)}
        if kind == codec.BLOB:
            data["content"] = body.decode(errors="replace")
        elif kind == codec.TREE:
            data["entries"] = [entry_as_dict(e) for e in codec.decode_tree_entries(body)]
        else:
            data.update(commit_as_dict(codec.decode_commit(body)))
    except CorruptObject as err:
        return _corrupt(err)
    return JsonResponse(data)


def _resolve_tree_sha(store, sha, rel_path):
    kind, body = load_object_or_404(store, sha)
    if kind == codec.COMMIT:
        current_tree_sha = codec.decode_commit(body).tree
    elif kind == codec.TREE:
        current_tree_sha = sha
    else:
        raise Http404(f"{sha} is a {kind}")
    if not rel_path:
        return current_tree_sha

    parts = [p for p in rel_path.strip("/").split("/") if p]
    for part in parts:
        _, tree_body = load_object_or_404(store, current_tree_sha)
        entries = codec.decode_tree_entries(tree_body)
        match = next(
            (e for e in entries if e.name == part and e.is_tree),
            None,
        )
        if not match:
            raise Http404(f"Directory '{rel_path}' not found")
        current_tree_sha = match.hexsha

    return current_tree_sha


def tree_view(request, sha, path=""):
    store = open_store()
    try:
        tree_sha = _resolve_tree_sha(store, sha, path)
        _, tree_body = load_object_or_404(store, tree_sha)
        entries = codec.decode_tree_entries(tree_body)
    except CorruptObject as err:
        return _corrupt(err)

    return JsonResponse(
        {
            "sha": tree_sha,
            "path": path,
            "entries": [entry_as_dict(e) for e in entries],
        }
    )


def blob_view(request, sha, path):
    store = open_store()
    parent_path, _, leaf = path.rstrip("/").rpartition("/")
    try:
        tree_sha = _resolve_tree_sha(store, sha, parent_path)
        _, tree_body = load_object_or_404(store, tree_sha)
        entries = codec.decode_tree_entries(tree_body)
        file_entry = next(
            (e for e in entries if e.name == leaf and not e.is_tree),
            None,
        )
        if not file_entry:
            raise Http404("File not found")
        _, body = load_object_or_404(store, file_entry.hexsha)
    except CorruptObject as err:
        return _corrupt(err)

    return HttpResponse(body, content_type="application/octet-stream")


def commit_detail(request, sha):
    store = open_store()
    try:
        kind, body = load_object_or_404(store, sha)
        if kind != codec.COMMIT:
            raise Http404(f"{sha} is a {kind}, not a commit")
        commit = commit_as_dict(codec.decode_commit(body))
    except CorruptObject as err:
        return _corrupt(err)
    commit["sha"] = sha
    return JsonResponse(commit)
