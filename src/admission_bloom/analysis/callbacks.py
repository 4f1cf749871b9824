"""
LangChain callback for inference latency tracking.
"""
from time import time
from typing import Any, Dict, List, Optional
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler


class InferenceLatencyCallback(BaseCallbackHandler):
    """
    Tracks how long the chat model calls of one analysis take.
    
    Errors still record their latency so slow failures show up in logs.
    """
    
    def __init__(self):
        super().__init__()
        self._start_times: Dict[UUID, float] = {}
        self._total_time: float = 0.0
    
    def on_chat_model_start(
        self,
        serialized: Dict[str, Any],
        messages: List[List[Any]],
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        """Record call start time."""
        self._start_times[run_id] = time()
    
    def on_llm_end(
        self,
        response: Any,
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        """Record call end time and add the latency."""
        self._stop(run_id)
    
    def on_llm_error(
        self,
        error: BaseException,
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        """Handle call errors - still record time if start was captured."""
        self._stop(run_id)
    
    def _stop(self, run_id: UUID) -> None:
        started = self._start_times.pop(run_id, None)
        if started is not None:
            self._total_time += time() - started
    
    def get_total_latency_ms(self) -> int:
        """Total model call time in milliseconds."""
        return int(self._total_time * 1000)
