"""
Security layer - principals and the authorization gate.

Every portal operation passes through authorize() before any domain code
runs. The principal it installs is visible to that call only.
"""
