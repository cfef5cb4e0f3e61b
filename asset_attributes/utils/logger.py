import logging
import json
import os
from pathlib import Path
import threading


class SingletonLogger:
    """
    Singleton logger that ensures only one root handler set is created per process.

    Child loggers ("asset_attributes.<area>") propagate into it, so every module
    can ask for its own name while sharing the same handlers.
    """
    _instance = None
    _lock = threading.Lock()
    _logger = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SingletonLogger, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            with self._lock:
                if not self._initialized:
                    self._logger = None
                    self._initialized = True

    def get_logger(self, name: str = "asset_attributes") -> logging.Logger:
        """
        Get a logger under the shared "asset_attributes" root.

        Args:
            name (str): Dotted logger name, e.g. "asset_attributes.serializer"

        Returns:
            logging.Logger: The named logger
        """
        if self._logger is None:
            with self._lock:
                if self._logger is None:
                    self._logger = self._create_logger()
        if not name or name == self._logger.name:
            return self._logger
        if not name.startswith(self._logger.name + "."):
            name = f"{self._logger.name}.{name}"
        return logging.getLogger(name)

    def configure(self, level: str = "INFO", log_dir: str = None) -> logging.Logger:
        """
        Re-apply level and file handlers, typically from the Flask config.

        Args:
            level (str): Logging level name
            log_dir (str): Directory for asset_attributes.log / errors.log, None for console only
        """
        logger = self.get_logger()
        with self._lock:
            self._install_handlers(logger, level, log_dir)
        return logger

    def _create_logger(self) -> logging.Logger:
        """
        Create the root package logger with console and optional file handlers.

        Returns:
            logging.Logger: Configured logger instance
        """
        logger = logging.getLogger("asset_attributes")
        self._install_handlers(
            logger,
            os.environ.get("LOG_LEVEL", "INFO"),
            os.environ.get("LOG_DIR") or None,
        )
        return logger

    @staticmethod
    def _install_handlers(logger: logging.Logger, level: str, log_dir: str = None) -> None:
        level_value = getattr(logging, str(level).upper(), logging.INFO)
        logger.setLevel(level_value)
        logger.propagate = False

        # Clear any existing handlers
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

        formatter = JsonFormatter({
            "timestamp": "asctime",
            "level": "levelname",
            "logger": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message"
        })

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level_value)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if log_dir:
            logs_dir = Path(log_dir)
            logs_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(logs_dir / "asset_attributes.log", encoding='utf-8')
            file_handler.setLevel(level_value)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            error_file_handler = logging.FileHandler(logs_dir / "errors.log", encoding='utf-8')
            error_file_handler.setLevel(logging.ERROR)
            error_file_handler.setFormatter(formatter)
            logger.addHandler(error_file_handler)


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.

    @param dict fmt_dict: Key: logging format attribute pairs. Defaults to {"message": "message"}.
    @param str time_format: time.strftime() format string. Default: "%Y-%m-%dT%H:%M:%S"
    @param str msec_format: Microsecond formatting. Appended at the end. Default: "%s.%03dZ"
    """
    def __init__(self, fmt_dict: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S", msec_format: str = "%s.%03dZ"):
        super().__init__()
        self.fmt_dict = fmt_dict if fmt_dict is not None else {"message": "message"}
        self.default_time_format = time_format
        self.default_msec_format = msec_format
        self.datefmt = None

    def usesTime(self) -> bool:
        """
        Overwritten to look for the attribute in the format dict values instead of the fmt string.
        """
        return "asctime" in self.fmt_dict.values()

    def formatMessage(self, record) -> dict:
        """
        Overwritten to return a dictionary of the relevant LogRecord attributes instead of a string.
        KeyError is raised if an unknown attribute is provided in the fmt_dict.
        """
        return {fmt_key: record.__dict__[fmt_val] for fmt_key, fmt_val in self.fmt_dict.items()}

    def format(self, record) -> str:
        """
        Mostly the same as the parent's class method, the difference being that a dict is manipulated and dumped as JSON
        instead of a string.
        """
        record.message = record.getMessage()

        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        message_dict = self.formatMessage(record)

        if record.exc_info:
            # Cache the traceback text to avoid converting it multiple times
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            message_dict["exc_info"] = record.exc_text

        if record.stack_info:
            message_dict["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(message_dict, default=str, ensure_ascii=False)


def setup_logging_from_config(config) -> logging.Logger:
    """
    Apply LOG_LEVEL / LOG_DIR from a Flask config mapping to the singleton logger.

    Args:
        config: Mapping with optional LOG_LEVEL and LOG_DIR keys
    """
    return SingletonLogger().configure(
        level=config.get("LOG_LEVEL", "INFO"),
        log_dir=config.get("LOG_DIR") or None,
    )


def get_logger(name: str = "asset_attributes") -> logging.Logger:
    """
    Get a logger that shares the singleton handlers.

    Args:
        name (str): Logger name, nested under "asset_attributes"

    Returns:
        logging.Logger: The named logger
    """
    return SingletonLogger().get_logger(name)
