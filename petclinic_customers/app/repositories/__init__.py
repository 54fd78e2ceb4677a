"""
Entity store access.

Repositories wrap an open ``sqlite3`` connection and translate rows
into schema objects.  They never commit; the calling service owns the
transaction.
"""
