import logging
import os
import sys
from datetime import datetime
from logging import Logger
from colorama import init, Fore, Style
init(autoreset=True)


LOG_FILE_PREFIX = "tweenprops_"


def create_log_directory(log_folder: str = None):
    """
    Ensures that the log directory exists. If not, it creates it.

    Args:
        log_folder: Optional path to log folder. If None, uses platform-specific location.
    """
    if log_folder is None:
        from tweenprops.utils.paths import get_logs_dir
        log_folder = str(get_logs_dir())

    if not os.path.exists(log_folder):
        os.makedirs(log_folder)
    return log_folder

def get_log_file_path(log_folder: str = None) -> str:
    """
    Returns a log file path with a timestamp in the name.
    Format: logs/tweenprops_YYYY-mm-dd_HHMMSS.log
    """
    if log_folder is None:
        from tweenprops.utils.paths import get_logs_dir
        log_folder = str(get_logs_dir())

    timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    return os.path.join(log_folder, f"{LOG_FILE_PREFIX}{timestamp}.log")

def purge_old_logs(log_folder: str, keep: int = 10):
    """
    Removes older log files, keeping only the most recent 'keep' files.
    Timestamped names sort lexicographically in chronological order.
    """
    all_logs = [f for f in os.listdir(log_folder)
                if f.startswith(LOG_FILE_PREFIX) and f.endswith(".log")]
    all_logs.sort()

    for old_file in all_logs[:-keep]:
        os.remove(os.path.join(log_folder, old_file))


class ColorFormatter(logging.Formatter):
    """
    A formatter that colorizes log level names using colorama.
    """
    color_map = {
        logging.DEBUG: Fore.BLUE,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.LIGHTRED_EX,
    }

    def format(self, record):
        color = self.color_map.get(record.levelno, Fore.WHITE)
        # Copy so file handlers never see the escape codes
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)

def init_logger(
    name: str = "TweenPropsLogger",
    log_folder: str = None,
    console_logging: bool = False,
    file_logging: bool = False,
    level: int = logging.INFO
) -> Logger:
    """
    Initializes and configures the logger with the specified settings.
    :param name: The logger's name.
    :param log_folder: The folder where log files should go. If None, uses platform-specific location.
    :param console_logging: Whether to log to the console.
    :param file_logging: Whether to log to a file.
    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    :return: A configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Without our own handlers, records go to the host application's logging setup
    logger.propagate = not (console_logging or file_logging)

    # Calling init_logger twice must not stack handlers
    if not logger.handlers:
        if file_logging:
            log_folder = create_log_directory(log_folder)
            purge_old_logs(log_folder, keep=10)
            file_handler = logging.FileHandler(get_log_file_path(log_folder), encoding="utf-8")
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S"
            ))
            logger.addHandler(file_handler)

        if console_logging:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColorFormatter(
                fmt="%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%H:%M:%S"
            ))
            logger.addHandler(console_handler)

    return logger


def _to_level(level: str | int) -> int:
    if isinstance(level, str):
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(level.upper(), logging.INFO)
    return level


class Log:
    """
    Wrapper class exposing Log.info(...) style calls on top of Python's logging.
    """
    _logger: Logger = init_logger()

    @classmethod
    def get_logger(cls) -> Logger:
        return cls._logger

    @classmethod
    def set_level(cls, level: str | int):
        """
        Set the logging level dynamically.

        Args:
            level: Log level as string ("DEBUG", "INFO", "WARNING", "ERROR") or int
        """
        level = _to_level(level)
        cls._logger.setLevel(level)
        for handler in cls._logger.handlers:
            handler.setLevel(level)

    @classmethod
    def configure(cls, level: str | int = logging.INFO, console_logging: bool = False,
                  file_logging: bool = False, log_folder: str = None):
        """
        Rebuild the logger's handlers from scratch.
        """
        for handler in list(cls._logger.handlers):
            cls._logger.removeHandler(handler)
            handler.close()
        cls._logger = init_logger(
            name=cls._logger.name,
            log_folder=log_folder,
            console_logging=console_logging,
            file_logging=file_logging,
            level=_to_level(level),
        )

    @classmethod
    def debug(cls, text: str):
        cls._logger.debug(text)

    @classmethod
    def info(cls, text: str):
        cls._logger.info(text)

    @classmethod
    def warning(cls, text: str, exc_info: bool = False):
        if exc_info:
            cls._logger.warning(text, exc_info=True)
        else:
            cls._logger.warning(text)

    @classmethod
    def error(cls, text: str):
        cls._logger.error(text)
