from __future__ import annotations

import logging
import logging.config
import os
import queue
import sys
import traceback
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path

import faulthandler

from trackview.app.app_settings_manager import AppSettingsManager, RunMode
from trackview.utils.log_util import level_from_name


@dataclass(frozen=True)
class LogPaths:
    log_file: Path
    crash_file: Path
    log_dir: Path


def _project_root_from_package() -> Path:
    """
    In development, this function returns the path to the project root directory.
    If the project structure is different, override this function.
    """
    # trackview/app/logging_setup.py -> parents[2] is assumed to be the project root.
    #   parents[0] = app
    #   parents[1] = trackview
    #   parents[2] = project root
    return Path(__file__).resolve().parents[2]


def _app_base_dir() -> Path:
    """
    In frozen mode, this function returns the directory of the executable.
    In development, this function returns the path to the project root directory.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return _project_root_from_package()


def _find_writable_log_dir(app_name: str) -> Path:
    """
    First, app_base_dir/logs
    Second, user's home directory
    """
    candidates = [
        _app_base_dir() / "logs",
        Path.home() / f".{app_name.lower()}" / "logs",
    ]
    for d in candidates:
        try:
            d.mkdir(parents=True, exist_ok=True)
            test = d / ".write_test"
            test.write_text("ok", encoding="utf-8")
            test.unlink(missing_ok=True)
            return d
        except OSError:
            continue
    # Finally, current directory.
    d = Path.cwd() / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def setup_startup_logging(
        app_name: str,
        *,
        level_file: int = logging.DEBUG,
        level_console: int = logging.INFO,
        max_bytes: int = 2_000_000,
        backup_count: int = 5,
    ) -> LogPaths:
    """
    Startup logging setup.
    - Rotating file handler
    - uncaught exception logging
    - faulthandler (crash logging)
    """
    log_dir = _find_writable_log_dir(app_name)
    log_file = log_dir / f"{app_name}.log"
    crash_file = log_dir / f"{app_name}.crash.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Prevent duplicate registration of handlers.
    if root.handlers:
        root.handlers.clear()

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    # File (rotating)
    fh = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    fh.setLevel(level_file)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Console
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level_console)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # crash log
    try:
        f = open(crash_file, "w", encoding="utf-8")
        faulthandler.enable(file=f)
        # Keep a reference so the file object is not collected.
        root._trackview_crash_fh = f
    except OSError:
        logging.getLogger(__name__).warning("Crash log %s is not writable", crash_file)

    # logging uncaught exception
    def _excepthook(exc_type, exc, tb):
        logging.critical(
            "Uncaught exception: \n%s",
            "".join(traceback.format_exception(exc_type, exc, tb)),
        )

    sys.excepthook = _excepthook

    # Diagnostic info after launch
    logging.info("=================================================")
    logging.info("%s starting...", app_name)
    logging.info("frozen=%s", getattr(sys, "frozen", False))
    logging.info("sys.executable=%s", sys.executable)
    logging.info("cwd=%s", os.getcwd())
    logging.info("log_file=%s", log_file)
    logging.info("crash_file=%s", crash_file)
    logging.info("app_base_dir=%s", _app_base_dir())
    logging.info("=================================================")

    return LogPaths(log_file=log_file, crash_file=crash_file, log_dir=log_dir)


def default_log_dir(app_name: str) -> Path:
    base = Path.home() / f".{app_name.lower()}" / "logs"
    base.mkdir(parents=True, exist_ok=True)
    return base


def build_config(app_name: str,
                 root_level: int | str | None = None,
                 console_level: int | str = logging.INFO,
                 log_dir: Path | None = None) -> dict:
    """Build a logging config dict."""
    if root_level is None:
        root_level = os.getenv("TRACKVIEW_LOG_LEVEL", "INFO")
    root_level = level_from_name(root_level)
    console_level = level_from_name(console_level)
    log_dir = log_dir or default_log_dir(app_name)
    log_file = str(log_dir / f"{app_name}.log")

    fmt = "%(asctime)s.%(msecs)03dZ %(levelname)s %(process)d %(threadName)s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt, "datefmt": datefmt,
            },
        },
        "handlers": {
            # Records go through a queue; the listener writes the file.
            "queue": {"class": "logging.handlers.QueueHandler", "queue": queue.Queue(-1)},
            "console": {"class": "logging.StreamHandler", "formatter": "standard", "level": console_level},
        },
        "root": {"level": root_level, "handlers": ["queue", "console"]},
        "_file_settings": {
            "filename": log_file,
            "maxBytes": 1024 * 1024 * 5,
            "backupCount": int(os.getenv("TRACKVIEW_LOG_BACKUP_COUNT", 5)),
            "encoding": "utf-8",
            "format": fmt,
            "datefmt": datefmt
        },
    }


class LogSystem:
    """Thin wrapper owning the QueueListener that writes the log file."""
    def __init__(self, app_name: str, level: int | str | None = None,
                 console_level: int | str = logging.INFO):
        cfg = build_config(app_name, level, console_level)
        file_settings = cfg.pop("_file_settings")
        logging.config.dictConfig(cfg)

        qh: QueueHandler | None = None
        for h in logging.getLogger().handlers:
            if isinstance(h, QueueHandler):
                qh = h
                break
        if qh is None:
            raise RuntimeError("QueueHandler not found.")

        # Kept to change levels after startup.
        self._console_handler: logging.Handler | None = None
        for h in logging.getLogger().handlers:
            if type(h) is logging.StreamHandler:
                self._console_handler = h
                break

        self._file_handler = RotatingFileHandler(
            file_settings["filename"],
            maxBytes=file_settings["maxBytes"],
            backupCount=file_settings["backupCount"],
            encoding=file_settings["encoding"],
        )
        self._file_handler.setFormatter(logging.Formatter(file_settings["format"], file_settings["datefmt"]))
        self.log_file = Path(file_settings["filename"])

        self.listener = QueueListener(qh.queue, self._file_handler, respect_handler_level=True)
        self.listener.start()

    @classmethod
    def from_levels(cls, app_name: str, *, root_level: int | str, console_level: int | str = logging.INFO) -> LogSystem:
        return cls(app_name, root_level, console_level)

    def apply_levels(self, root_level: int, console_level: int | None = None, file_level: int | None = None) -> None:
        """Update log levels after startup."""
        logging.getLogger().setLevel(root_level)
        if self._console_handler is not None and console_level is not None:
            self._console_handler.setLevel(console_level)
        if file_level is not None:
            self._file_handler.setLevel(file_level)

    def stop(self):
        self.listener.stop()
        self._file_handler.close()


def apply_logging_policy(logs: LogSystem, settings: AppSettingsManager) -> None:
    """Switch log levels according to the run mode and configured level."""
    mode = getattr(settings, "run_mode", RunMode.PRODUCTION)

    if mode == RunMode.DEVELOPMENT or mode == RunMode.VERBOSE:
        root = logging.DEBUG
        console = logging.DEBUG
        file = logging.DEBUG
    else:
        root = logging.DEBUG
        console = level_from_name(getattr(settings, "logging_level", "INFO"))
        file = logging.DEBUG

    logs.apply_levels(root_level=root, console_level=console, file_level=file)
