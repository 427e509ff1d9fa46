# ABOUTME: Registry package for identity profile management.
# ABOUTME: Exports ProfileRegistry and the shared field validator.

from identity_graph.registry.service import ProfileRegistry, validate_fields

__all__ = ["ProfileRegistry", "validate_fields"]
