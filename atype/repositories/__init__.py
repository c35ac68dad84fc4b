"""
Persistence adapters.

Today the state is a single JSON file; services depend on the store object
returned by get_store() rather than reading the file themselves.
"""
