"""
Initialize the CLI package. Contains shared CLI utilities and configuration.
"""

import logging

from shellkit.core.config import settings

# Configure global logging for CLI modules; wrappers stay quiet by default.
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.WARNING),
    format="%(levelname)s %(name)s - %(message)s"
)
