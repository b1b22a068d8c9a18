"""
Custom exception hierarchy for colorsensor.

## Exception Hierarchy

```
ColorSensorError (base)
├── DeviceError
│   ├── DeviceUnavailableError
│   └── StreamFaultError
├── ProtocolError
│   ├── MalformedLineError
│   └── OutOfRangeChannelError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

None of these ever escape the pipeline: device and protocol errors degrade
to "no confirmed color" and are logged. Configuration errors surface at
startup through the CLI, with a recovery hint.

### Example: Port Not Available

```python
from colorsensor.exceptions import DeviceUnavailableError

raise DeviceUnavailableError(port="COM3", original_error="could not open port")

# User sees: "Color sensor port COM3 is not available."
```

See `colorsensor.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import ColorSensorError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceError, DeviceUnavailableError, StreamFaultError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_serial_error,
)
from .protocol import MalformedLineError, OutOfRangeChannelError, ProtocolError

__all__ = [
    # Base
    "ColorSensorError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceError",
    "DeviceUnavailableError",
    "StreamFaultError",
    # Protocol
    "MalformedLineError",
    "OutOfRangeChannelError",
    "ProtocolError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "wrap_pydantic_error",
    "wrap_serial_error",
]
