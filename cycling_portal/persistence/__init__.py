"""Portal state persistence."""

from cycling_portal.persistence.state_file import load_portal_state, save_portal_state

__all__ = ["load_portal_state", "save_portal_state"]
