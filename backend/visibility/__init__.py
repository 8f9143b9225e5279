from .coordinator import (
    VisibilityCoordinator,
    VisibilitySignal,
    VisibilityState,
)

__all__ = ["VisibilityCoordinator", "VisibilitySignal", "VisibilityState"]
