"""Core gameplay primitives (typed errors shared by the store, turn processing and routes).

Kept free of FastAPI concerns so it can be reused by API routes, CLI, and tests.
"""
