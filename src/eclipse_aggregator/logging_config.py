# src/eclipse_aggregator/logging_config.py
import logging
import logging.config
import yaml
from pathlib import Path
import coloredlogs
import sys
from typing import Optional

config_logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / 'logging_config.yaml'
PACKAGE_LOGGER = "eclipse_aggregator"


def _fallback(level: int) -> None:
    logging.basicConfig(level=level, format='%(levelname)s:%(name)s:%(message)s')


def setup_logging(config_path: Optional[Path] = None, verbose: bool = False) -> None:
    """
    Configures logging from the YAML dictConfig file shipped with the package.
    Falls back to basicConfig when the file is missing, empty or invalid.
    """
    # coloredlogs must be initialised before dictConfig loads ColoredFormatter
    try:
        coloredlogs.install()
        config_logger.debug("Called coloredlogs.install() for initial setup.")
    except Exception as install_e:
        print(f"Warning: coloredlogs.install() failed during initial setup: {install_e}", file=sys.stderr)

    config_path = config_path or DEFAULT_CONFIG_PATH
    level = logging.DEBUG if verbose else logging.INFO

    try:
        if config_path.is_file():
            with open(config_path, 'rt', encoding='utf-8') as f:
                config = yaml.safe_load(f.read())

            if config:
                logging.config.dictConfig(config)
                logging.getLogger(PACKAGE_LOGGER).debug("Logging setup complete from YAML using dictConfig.")
            else:
                _fallback(level)
                logging.getLogger(PACKAGE_LOGGER).warning(
                    f"Logging config file {config_path} was empty. Fell back to basic logging configuration.")
        else:
            _fallback(level)
            logging.getLogger(PACKAGE_LOGGER).warning(
                f"Logging config file not found ({config_path}). Fell back to basic logging configuration.")

    except yaml.YAMLError as yaml_e:
        print(f"Error parsing logging configuration file {config_path}: {yaml_e}", file=sys.stderr)
        _fallback(level)
        logging.getLogger(PACKAGE_LOGGER).error(f"Failed to parse logging config YAML: {yaml_e}")
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        # dictConfig reports bad schemas with these
        print(f"Error loading logging configuration from {config_path}: {e}", file=sys.stderr)
        _fallback(level)
        logging.getLogger(PACKAGE_LOGGER).error(f"Failed to load logging config: {e}", exc_info=True)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
