"""
Headers bounded context: application layer.

Assembles the configured header policies into one ordered pipeline.
"""
