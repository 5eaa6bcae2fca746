"""Exception types raised by stringbean."""


class StringBeanError(Exception):
    """Base class for all stringbean errors."""


class InvalidArgument(StringBeanError, ValueError):
    """Raised when a caller passes a count, size or weight outside its domain."""


class PlanningError(StringBeanError, RuntimeError):
    """Raised when the thread planner cannot choose a next anchor."""
