"""Dashboard state synchronization.

Owns the document list, selection, chat history, pending query, and busy
flag, and keeps them a verbatim mirror of the remote service by fetching
the affected collection again after every mutation.
"""

from insight.state.controller import ClientStateController, DashboardState

__all__ = ["ClientStateController", "DashboardState"]
