class DuplicateKeyError(Exception):
    """A unique constraint rejected the write (e.g. users.email)."""
