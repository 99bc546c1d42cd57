"""Exception hierarchy for spacer."""


class SpacerError(Exception):
    """Base exception for all spacer failures."""


class InputReadError(SpacerError):
    """Reading a line from the input stream failed."""


class OutputWriteError(SpacerError):
    """Writing a relayed line or a spacer to the output stream failed."""


class TerminalSizeUnavailable(SpacerError):
    """The terminal width could not be queried."""


class TimezoneResolutionError(SpacerError):
    """A timezone name could not be resolved to a zone."""


class ConfigurationConflict(SpacerError):
    """Command-line options contradict each other or are out of range."""
