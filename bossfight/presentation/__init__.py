"""Console presentation for boss battles."""

from bossfight.presentation.console import ConsolePresenter, format_status, hp_bar

__all__ = [
    "ConsolePresenter",
    "format_status",
    "hp_bar",
]
