"""
Server-side data portal.

Dispatches create/fetch/update/delete requests to domain objects on behalf
of a transport, propagating the caller's principal into the call.
"""
