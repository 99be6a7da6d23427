"""Host application for the dashboard.

Endpoints:
    - GET /health: Service health status
    - /, /dashboard: NiceGUI pages, mounted by insight.main
"""

from insight.api.app import app, create_app

__all__ = ["app", "create_app"]
