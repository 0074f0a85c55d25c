"""tiny-git: a loose-object store compatible with git's object database."""

__version__ = "0.1.0"
