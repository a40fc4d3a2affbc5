"""Interactive layout editor model.

Modules:
    geometry: Points, rectangles and path lengths in pixel space
    session: Design session state and interaction modes
    events: Input events consumed by the editor
    machine: Transition function applying events to a session
    distances: Real-world distances derived from a session
    manager: Per-tab session registry
    render: Plotly scene built from a session (read only)
"""
