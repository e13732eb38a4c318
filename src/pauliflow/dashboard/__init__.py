"""
pauliflow dashboard: a JSON API over error-propagation sessions.

Launch with: pauliflow serve
Or programmatically: from pauliflow.dashboard import launch; launch()
"""

from pauliflow.dashboard.server import GATE_CATALOG, SessionStore, create_app, launch

__all__ = ["GATE_CATALOG", "SessionStore", "create_app", "launch"]
