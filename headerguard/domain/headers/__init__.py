"""
Headers bounded context: domain layer.

This module contains all domain logic for response header policies:
- Cache profiles and their lookup store
- Transport-security (HSTS) settings
- Fixed defensive headers (MIME sniffing, downloads, framing)
"""
