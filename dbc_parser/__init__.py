"""
DBC Parser

Parses the message (`BO_`) and signal (`SG_`) records of CAN-bus DBC
database files into structured definitions, reporting malformed input
with a precise error kind.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0 OR MIT"

import logging

# Set up default logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

def version() -> str:
    """Return the version string."""
    return __version__

def internal_error(message: str, *args) -> None:
    """Log an error that points at a bug rather than at bad input."""
    text = message.format(*args) if args else message
    logging.getLogger(__name__).error(f"Internal Error: {text}")

# Export commonly used types and functions
__all__ = [
    "version",
    "internal_error",
    "__version__",
    "__license__",
]
