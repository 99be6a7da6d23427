"""NiceGUI interface - thin visualization layer over the dashboard state.

Responsibilities:
    - Landing page with a link to the dashboard
    - Document list with upload, selection, and delete
    - Per-document chat with the AI analysis endpoint
    - Modal alerts and delete confirmation

Contains no business logic. Delegates every action to the state
controller and re-renders when it reports a change.
"""
