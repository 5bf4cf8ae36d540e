"""
Errors raised by the session store and the device registry.

The HTTP adapter translates these into HTTPException responses.
"""


class SmartFloraError(Exception):
    """Base class for SmartFlora errors."""


class NotFound(SmartFloraError):
    """Raised when a pot id does not exist in the registry."""

    def __init__(self, pot_id: str):
        super().__init__(f"Pot '{pot_id}' not found")
        self.pot_id = pot_id


class AlreadyBound(SmartFloraError):
    """Raised when binding a device whose serial number is already registered."""

    def __init__(self, device_serial_number: str):
        super().__init__(
            f"Device with serial number '{device_serial_number}' already bound"
        )
        self.device_serial_number = device_serial_number


class TransientFailure(SmartFloraError):
    """Simulated network round trip failed; the caller may retry or abort."""

    def __init__(self, operation: str):
        super().__init__(f"Network request for '{operation}' failed")
        self.operation = operation
