"""
Custom exception hierarchy for lpxcontrol.

```
LpxControlError (base)
├── DeviceError
│   ├── DeviceConnectionError   fatal at startup
│   └── SendError               logged, never fatal
├── ActionExecutionError        logged, never fatal
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions carry `user_message`, `technical_message`,
`recoverable` and `recovery_hint`.
"""

from .action import ActionExecutionError
from .base import LpxControlError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceConnectionError, DeviceError, SendError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error

__all__ = [
    # Actions
    "ActionExecutionError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceConnectionError",
    "DeviceError",
    "SendError",
    # Handlers
    "ErrorContext",
    # Base
    "LpxControlError",
    "format_error_for_display",
    "wrap_pydantic_error",
]
