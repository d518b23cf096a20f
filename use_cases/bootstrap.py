"""Startup orchestration: restore the tab's session before any page decides anything."""

from dataclasses import dataclass
from typing import Literal, Tuple

from utils import session_manager

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Create the per-tab SessionManager, restore the stored session once and flush queued browser writes."""
    executed_steps = []

    manager = session_manager.get_session_manager()
    executed_steps.append("get_session_manager")

    if manager.is_loading:
        manager.initialize()
        executed_steps.append("initialize_session")

    if session_manager.flush_store_writes(manager):
        executed_steps.append("flush_store_writes")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
