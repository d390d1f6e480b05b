"""Service layer — resolution and exchanges returning ServiceResult.

Services may import from domain, infrastructure, protocol, and plugins.
They must never import from commands or output.
"""
