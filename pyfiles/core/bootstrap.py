"""
pyfiles Bootstrap

One call setup for applications embedding pyfiles:
1. Load configuration (defaults when no file is given)
2. Initialize logging from the ``logging`` section
3. Build a Files façade from the ``files`` section

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, TYPE_CHECKING

from .config_loader import ConfigLoader, Config
from pyfiles.logger import Logger, LogLevel, get_logger

if TYPE_CHECKING:
    from pyfiles.editor.files import Files


def init_logging(config: Config) -> None:
    """
    Initialize the logging system from configuration.

    Raises:
        ValueError: If the configured level name is unknown
    """
    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output,
    )


def bootstrap(config_path: Optional[str] = None) -> 'Files':
    """
    Load configuration, initialize logging and build a Files instance.

    Args:
        config_path: Optional JSON configuration file

    Raises:
        ConfigValidationError: If the configuration file is missing or invalid
    """
    # Import here to avoid circular dependency
    from pyfiles.editor.files import Files

    loader = ConfigLoader()
    config = loader.load(config_path) if config_path else loader.config

    init_logging(config)
    get_logger('bootstrap').info(
        "pyfiles ready",
        context={'memory': config.files.memory, 'indentation': config.files.indentation}
    )

    return Files.from_config(config)
