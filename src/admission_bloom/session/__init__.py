"""
Session layer: the single analysis session and its state machine.
"""

from .session_state import SessionPhase, SessionState
from .controller import AnalysisController, PHASE_MESSAGES

__all__ = [
    "AnalysisController",
    "PHASE_MESSAGES",
    "SessionPhase",
    "SessionState",
]
