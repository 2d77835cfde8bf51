"""golemctl — remote-control command-line client for a Golem node.

Negotiates a ready RPC session (unlock, terms, readiness wait) and renders
command results as tables, JSON or YAML.
"""

from golemctl.version import __version__

__all__: list[str] = ["__version__"]
