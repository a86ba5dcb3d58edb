"""Offline conversation preview."""

from menuflow.runtime.matching import match_option, normalize_text
from menuflow.runtime.simulator import FlowSimulator, SimulatorStatus, render_menu

__all__ = ["FlowSimulator", "SimulatorStatus", "match_option", "normalize_text", "render_menu"]
