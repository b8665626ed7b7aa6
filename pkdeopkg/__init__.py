"""pkdeopkg - PackageKit backend bridging to the embedded eopkg runtime."""

__version__ = "0.1.0"

from pkdeopkg.backend import Backend, get_backend

__all__ = ["Backend", "get_backend", "__version__"]
