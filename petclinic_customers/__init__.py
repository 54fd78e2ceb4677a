"""
Top-level package for the Pet Clinic customers service.

Makes ``petclinic_customers`` a package so that modules within ``app``
can be imported using fully qualified names like
``petclinic_customers.app.main``.  All functionality lives in
submodules under ``app``.
"""

__all__ = []
