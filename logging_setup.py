import json, logging.config, pathlib, copy
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "rov-teleop"


def app_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        # Running from a source checkout that was never installed
        return "dev"


class VersionFilter(logging.Filter):
    """Stamps every record with the running application version as ``record.version``."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.version = app_version()

    def filter(self, record: logging.LogRecord) -> bool:
        record.version = self.version
        return True


_DEFAULT = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "app_version": {"()": "logging_setup.VersionFilter"},
    },
    "formatters": {
        "plain": {"format": "%(asctime)s [%(levelname)s] %(name)s - %(message)s"},
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(version)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
            "level": "INFO",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": "rov_teleop.log",
            "maxBytes": 500_000,
            "backupCount": 5,
            "formatter": "plain",
            "level": "DEBUG",
        },
        # One JSON object per line, for tooling that reads a session back
        "json_file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": "log.json",
            "maxBytes": 2_000_000,
            "backupCount": 3,
            "formatter": "json",
            "filters": ["app_version"],
            "level": "DEBUG",
        },
    },
    "root": {"handlers": ["console", "file", "json_file"], "level": "DEBUG"},
}

@lru_cache(maxsize=1)
def setup_logging(cfg_path: str | None = "log_config.json",
                  *,
                  logfile: str | None = None,
                  json_logfile: str | None = None,
                  console_level: str | None = None):
    """Configure logging once per process, before any session is built.

    - If *cfg_path* exists, its top-level sections replace the defaults.
    - *logfile*, *json_logfile* and *console_level* override the text log,
      the JSON-lines log and the console threshold.
    - Records written to the JSON log carry the application version.
    """
    config = copy.deepcopy(_DEFAULT)
    if cfg_path and pathlib.Path(cfg_path).exists():
        user = json.loads(pathlib.Path(cfg_path).read_text())
        config.update(user)

    if logfile:
        config["handlers"]["file"]["filename"] = logfile
    if json_logfile:
        config["handlers"]["json_file"]["filename"] = json_logfile
    if console_level:
        config["handlers"]["console"]["level"] = console_level

    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug(f"Logging configured for {DIST_NAME} {app_version()}")
