__all__ = [
    "BootConfiguration",
    "LabdeskContainer",
]

from .labdesk import BootConfiguration, LabdeskContainer
