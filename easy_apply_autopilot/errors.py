"""Exceptions used inside the autopilot. None of them escape StepNavigator.run()."""


class AutopilotError(Exception):
    """Base class for autopilot failures."""
    pass


class DocumentError(AutopilotError):
    """A call across the document boundary failed (element gone, detached, ...)."""
    pass


class InferenceUnavailable(AutopilotError):
    """The inference backend failed, timed out, or returned an unusable payload."""
    pass
