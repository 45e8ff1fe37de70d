"""
Vic Emulator: Exceptions

Programs never raise while running: STOP and running out of input are
ordinary terminal states. These exceptions are only for callers that hand
the emulator data it cannot represent.
"""


class EmulatorError(Exception):
    """Base class for emulator API misuse."""


class InvalidValueError(EmulatorError, ValueError):
    """A number outside [-999, 999] was given where a Value is required."""
    def __init__(self, message: str, value=None):
        self.value = value
        super().__init__(message)


class ProgramLoadError(EmulatorError):
    """A numeric program does not fit into memory or holds invalid values."""
    def __init__(self, message: str, program=None):
        self.program = program
        super().__init__(message)
