import hashlib


def content_hash(text: str) -> str:
    """MD5 hex digest of the exact source text, used as a translation cache key."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()
