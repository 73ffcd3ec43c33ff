"""Core interfaces.

Protocols implemented by adapters, so the services never depend on a concrete
subprocess or terminal implementation.
"""
