"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Owners and pets live in the ``owners`` endpoint module,
pet types in ``pet_types``; the business rules every mutation passes
through are in ``services.rules``.  Versioning is handled by grouping
routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
