"""
Service layer: each public method is one load -> validate -> mutate -> save
transaction over the document store. Routers call services and never touch
the JSON file directly.
"""
