"""
Operation handlers - one slice per lifecycle operation.

Criteria resolution and method invocation are shared by the slices and
live beside them in _resolver.py and _invoker.py.
"""
