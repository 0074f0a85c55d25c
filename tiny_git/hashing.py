import hashlib
import string

DIGEST_SIZE = 20
HEX_DIGEST_SIZE = 40


def digest(data):
    return hashlib.sha1(data).digest()


def hexdigest(data):
    return hashlib.sha1(data).hexdigest()


def is_hexsha(value):
    return (
        isinstance(value, str)
        and len(value) == HEX_DIGEST_SIZE
        and all(c in string.hexdigits for c in value)
    )
