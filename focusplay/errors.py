# -*- coding: utf-8 -*-


class PersistenceError(Exception):
    """Raised by the storage layer when a record cannot be written or read."""
