"""kmet - live terminal dashboard for Kubernetes pod and node usage."""

from kmet.constants.values import APP_VERSION

__version__ = APP_VERSION

__all__ = [
    "__version__",
]
