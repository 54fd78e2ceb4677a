"""
Service layer.

Each service encapsulates the business logic for a domain and runs
every operation inside a single database transaction.  API handlers
only call services and never touch the database directly.
"""
