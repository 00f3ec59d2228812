"""Flag use cases."""

from .toggle_flag import ToggleFlagRequest, ToggleFlagResponse, ToggleFlagUseCase

__all__ = ["ToggleFlagRequest", "ToggleFlagResponse", "ToggleFlagUseCase"]
