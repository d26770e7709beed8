"""Session bootstrap helpers for config, logging, and app wiring."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, TextIO

from web2glass.apps import APP_MODULES
from web2glass.apps.base import AppContext, AppModule, DualSurfaceApp
from web2glass.common.config import Config, ConfigLoader
from web2glass.common.event_log import EventLog
from web2glass.common.logging_setup import eventLogFile_attach, logging_setup
from web2glass.common.settings import settings
from web2glass.session.runner import SessionReport, SessionRunner, statusCallback_create
from web2glass.surface.factory import bridgeAcquire_create
from web2glass.surface.panel import PanelSurface
from web2glass.surface.simulator import SimulatedBridge

logger = logging.getLogger(__name__)


@dataclass
class AppSession:
    """Everything wired for one scripted app session"""
    module: AppModule
    app: DualSurfaceApp[Any]
    panel: PanelSurface
    event_log: EventLog
    simulator: Optional[SimulatedBridge]
    runner: SessionRunner
    report: SessionReport


def configWithSettings_load(args: argparse.Namespace) -> Config:
    """
    Load config with CLI overrides and initialize settings.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded config.
    """
    config_path: Path | None = Path(args.config) if args.config else None
    try:
        config: Config = ConfigLoader.configWithOverrides_load(
            file_path=config_path,
            bridge_backend=getattr(args, "bridge", None),
            connect_timeout_ms=getattr(args, "connect_timeout_ms", None),
            proxy_url=getattr(args, "proxy_url", None),
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Create a config.yml file or specify path with --config", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)
    settings.initialize(config)
    return config


def loggingWithConfig_setup(args: argparse.Namespace, config: Config) -> None:
    """
    Setup logging from config and optional CLI override.

    Args:
        args: Parsed CLI args.
        config: Loaded config.
    """
    log_level: str = getattr(args, "log_level", None) or config.logging.level
    logging_setup(log_level, config.logging.format, config.logging.file)
    eventLogFile_attach(config.logging.event_log)


def appSession_create(module_id: str, config: Config, stream: Optional[TextIO] = None) -> AppSession:
    """
    Wire panel, bridge acquisition, app and runner for one app.

    Args:
        module_id: Registry id of the app.
        config: Loaded config.
        stream: Optional stream echoing panel and status lines.

    Returns:
        Wired session.

    Raises:
        ValueError: If the app id or bridge backend is unknown.
    """
    module: AppModule | None = APP_MODULES.get(module_id)
    if module is None:
        raise ValueError(f"Unknown app '{module_id}'. Supported: {', '.join(APP_MODULES)}.")

    acquire, simulator = bridgeAcquire_create(
        config.bridge.backend,
        delay_ms=config.bridge.acquire_delay_ms,
        reject_updates=config.bridge.reject_updates,
    )
    report = SessionReport()
    panel = PanelSurface(stream)
    event_log = EventLog(max_entries=config.logging.event_history_size)
    context = AppContext(
        set_status=statusCallback_create(report, stream),
        local=panel,
        acquire=acquire,
        event_log=event_log,
        connect_timeout_ms=config.bridge.connect_timeout_ms,
    )
    app = module.actions_create(context)
    context.set_status(module.initial_status)
    logger.info("%s session wired (bridge backend: %s)", module.name, config.bridge.backend)
    return AppSession(
        module=module,
        app=app,
        panel=panel,
        event_log=event_log,
        simulator=simulator,
        runner=SessionRunner(app, simulator, report),
        report=report,
    )
