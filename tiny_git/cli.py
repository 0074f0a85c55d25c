"""Command-line interface for tiny-git"""
import argparse
import logging
import os
import sys

from . import codec
from .builders import TreeBuilder, commit_tree, hash_file
from .config import load_config
from .errors import InvalidArguments, ObjectNotFound, TinyGitError
from .logging_config import setup_logging
from .store import ObjectStore, init_repository

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise InvalidArguments(message)


def build_parser():
    parser = _ArgumentParser(prog="tiny-git", description="tiny-git command")
    commands = parser.add_subparsers(dest="command")
    commands.required = True

    init_parser = commands.add_parser("init")
    init_parser.set_defaults(func=init)

    cat_file_parser = commands.add_parser("cat-file")
    cat_file_parser.set_defaults(func=cat_file)
    mode = cat_file_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-p", dest="mode", action="store_const", const="pretty",
                      help="pretty-print the object body")
    mode.add_argument("-t", dest="mode", action="store_const", const="type",
                      help="print the object type")
    mode.add_argument("-s", dest="mode", action="store_const", const="size",
                      help="print the object size")
    mode.add_argument("-e", dest="mode", action="store_const", const="exists",
                      help="fail unless the object exists")
    cat_file_parser.add_argument("object")

    hash_object_parser = commands.add_parser("hash-object")
    hash_object_parser.set_defaults(func=hash_object)
    hash_object_parser.add_argument("-w", dest="write", action="store_true",
                                    help="write the blob into the object store")
    hash_object_parser.add_argument("file")

    ls_tree_parser = commands.add_parser("ls-tree")
    ls_tree_parser.set_defaults(func=ls_tree)
    ls_tree_parser.add_argument("--name-only", action="store_true")
    ls_tree_parser.add_argument("tree")

    write_tree_parser = commands.add_parser("write-tree")
    write_tree_parser.set_defaults(func=write_tree)

    commit_tree_parser = commands.add_parser("commit-tree")
    commit_tree_parser.set_defaults(func=commit_tree_cmd)
    commit_tree_parser.add_argument("tree")
    commit_tree_parser.add_argument("-p", "--parent")
    commit_tree_parser.add_argument("-m", "--message", required=True)

    return parser


def _format_entry(entry):
    return f"{entry.mode} {entry.kind} {entry.hexsha}\t{entry.name}"


def _write_bytes(data):
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.flush()


def init(args, config, store):
    repo_dir, existed = init_repository(os.getcwd(), config.git_dir)
    if existed:
        print(f"Reinitialized existing git directory in {repo_dir}")
    else:
        print("Initialized git directory")


def cat_file(args, config, store):
    if args.mode == "exists":
        if not store.exists(args.object):
            raise ObjectNotFound(f"object {args.object} not found")
        return
    kind, body = store.read_object(args.object)
    if args.mode == "type":
        print(kind)
    elif args.mode == "size":
        print(len(body))
    elif kind == codec.TREE:
        for entry in codec.decode_tree_entries(body):
            print(_format_entry(entry))
    else:
        _write_bytes(body)


def hash_object(args, config, store):
    print(hash_file(store, args.file, write=args.write))


def ls_tree(args, config, store):
    kind, body = store.read_object(args.tree)
    if kind == codec.COMMIT:
        kind, body = store.read_object(codec.decode_commit(body).tree)
    if kind != codec.TREE:
        raise InvalidArguments(f"{args.tree} is a {kind}, not a tree")
    for entry in codec.decode_tree_entries(body):
        print(entry.name if args.name_only else _format_entry(entry))


def write_tree(args, config, store):
    builder = TreeBuilder(store, skip_name=config.git_dir, max_workers=config.workers)
    print(builder.write_tree(os.getcwd()))


def commit_tree_cmd(args, config, store):
    print(commit_tree(
        store,
        args.tree,
        args.parent,
        args.message,
        config.author,
        config.committer,
    ))


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = build_parser().parse_args(argv)
        config = load_config()
        setup_logging(config)
        store = ObjectStore.for_worktree(os.getcwd(), config.git_dir)
        args.func(args, config, store)
    except (TinyGitError, OSError) as err:
        logger.debug("%s failed", " ".join(argv), exc_info=True)
        print(f"fatal: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
