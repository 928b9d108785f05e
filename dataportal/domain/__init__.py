"""
Domain layer - contracts between the portal and domain objects.

The portal treats domain objects opaquely. These types only describe what
a domain author provides: criteria naming the target type, and the
lifecycle methods the portal calls.
"""
