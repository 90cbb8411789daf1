"""Internal modules for Nexus SDK.

These modules back the public client and are not intended for direct use in
application code.

Modules:
    config - Per-client configuration store
    events - Server-sent event source
    http - HTTP transport
    log - Logger setup
    query - Query-string builder
"""
