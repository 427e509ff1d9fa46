# ABOUTME: Main package initialization for the identity graph registry.
# ABOUTME: Exports version information and the service facade.

from importlib.metadata import version

from identity_graph.service import IdentityGraphService

__version__ = version("identity-graph")

__all__ = ["IdentityGraphService", "__version__"]
