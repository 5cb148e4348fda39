import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from openrouter_chat.infrastructure.exceptions import ConfigurationError

DEFAULT_ENV_FILE = ".env"


def create_logger(
    log_level: str = "WARNING",
    logger_name: str = "openrouter-chat",
    logs_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Create a logger that outputs to the console (stderr) and optionally to a file.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance and the log file.
        logs_dir (str | Path | None): Directory for log files. If None, only console
            logging is configured.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.hasHandlers():  # Prevent handler duplication
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if logs_dir is not None:
            try:
                logs_path = Path(logs_dir)
                logs_path.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(logs_path / f"{logger_name}.log")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"File logging disabled: {e}")

    return logger


def load_local_env(env_file: str | Path | None = None) -> bool:
    """
    Load KEY=value lines from a local .env file into the process environment.

    Variables that are already set are not overridden. A missing file is not an
    error: the function just returns False. Defaults to ".env" in the current
    working directory.
    """
    path = env_file or DEFAULT_ENV_FILE
    try:
        return load_dotenv(dotenv_path=path, override=False)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"error loading {path}: {e}") from e


def get_parameters(param_names: list[str] | str) -> dict[str, str | None]:
    """
    Retrieve parameters from environment variables.

    Parameters are stored in the environment in uppercase; the result is keyed
    by the lowercase name. Missing parameters map to None.
    """
    if isinstance(param_names, str):
        param_names = [param_names]

    result = {}
    for param_name in param_names:
        result[param_name.lower()] = os.getenv(param_name.upper())
    return result
