"""Strategic Insight Dashboard - document upload and AI chat front-end.

Combines NiceGUI for the dashboard, HTTPX for the remote document API,
FastAPI for hosting, and Pydantic for data validation.

Components:
    - client: Async HTTP client for the remote document service
    - state: Client-side state synchronization for documents and chat
    - ui: Landing page and dashboard
    - api: Host application and health endpoint
    - models: Wire schemas shared by client and state
"""

__version__ = "0.1.0"
