"""Storage backends and the transactional key/value contract.

This package defines what the marshalling engine requires from a store
and ships in-memory, defaults-database, plist, and YAML backends.
"""
