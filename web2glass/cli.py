"""web2glass command-line interface"""

import argparse
import asyncio
import sys
from typing import NoReturn, Optional, TextIO

from web2glass import __version__
from web2glass.apps import APP_MODULES


def arguments_parse(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list; defaults to `sys.argv[1:]`.

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="web2glass",
        description="Run a dual-surface glasses app against a scripted session",
    )

    parser.add_argument("--version", action="version", version=f"web2glass {__version__}")

    parser.add_argument(
        "--app",
        type=str,
        choices=sorted(APP_MODULES),
        default="base_app",
        help="App to run (default: base_app)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--script",
        type=str,
        metavar="PATH",
        default=None,
        help="Newline-delimited JSON session script ('-' reads stdin). "
        "Without a script the app connects and runs its main action once.",
    )

    parser.add_argument(
        "--bridge",
        type=str,
        choices=["simulator", "none"],
        default=None,
        help="Glasses bridge backend (overrides config)",
    )

    parser.add_argument(
        "--connect-timeout-ms",
        type=int,
        default=None,
        dest="connect_timeout_ms",
        help="Bridge acquisition budget in milliseconds (overrides config)",
    )

    parser.add_argument(
        "--proxy-url",
        type=str,
        default=None,
        dest="proxy_url",
        help="[restapi] Proxy endpoint for GET requests (overrides config)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """
    Main entry point for the web2glass command

    Args:
        argv: Optional argument list.
    """
    args = arguments_parse(argv)

    log_level_override: str | None = logLevelOverride_get(args)

    try:
        argsWithLogLevel_apply(args, log_level_override)
        exit_code: int = asyncio.run(session_run(args))
        sys.exit(exit_code)

    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def argsWithLogLevel_apply(args: argparse.Namespace, log_level: str | None) -> None:
    """
    Apply optional log level override to args.

    Args:
        args: Parsed CLI args.
        log_level: Optional log level string.
    """
    if log_level is not None:
        setattr(args, "log_level", log_level)


def scriptSource_open(path: str | None) -> TextIO | None:
    """
    Open the session script source.

    Args:
        path: Script path, '-' for stdin, or None.

    Returns:
        Open text stream, or None when no script was given.
    """
    if path is None:
        return None
    if path == "-":
        return sys.stdin
    return open(path, "r")


async def session_run(args: argparse.Namespace, stream: TextIO | None = None) -> int:
    """
    Load config, wire the app and play the session.

    Args:
        args: Parsed CLI args.
        stream: Output stream for panel and status lines; defaults to stdout.

    Returns:
        Process exit code.
    """
    from web2glass.session.bootstrap import (
        appSession_create,
        configWithSettings_load,
        loggingWithConfig_setup,
    )
    from web2glass.session.script import ScriptMessageBuilder, scriptStream_parse

    output: TextIO = stream if stream is not None else sys.stdout
    config = configWithSettings_load(args)
    loggingWithConfig_setup(args, config)
    session = appSession_create(args.app, config, output)

    source: TextIO | None = scriptSource_open(args.script)
    if source is None:
        messages = [
            ScriptMessageBuilder.connectMessage_create(),
            ScriptMessageBuilder.actionMessage_create(),
        ]
        errors: list[str] = []
    else:
        try:
            messages, errors = scriptStream_parse(source)
        finally:
            if source is not sys.stdin:
                source.close()

    for error in errors:
        print(f"Script error: {error}", file=sys.stderr)
    if errors:
        return 1

    report = await session.runner.script_run(messages)
    output.write(f"[done] {report.steps_run} steps, mode={session.app.mode.value}\n")
    for entry in session.event_log.entries_get():
        output.write(f"[event] {entry}\n")
    output.flush()
    return 0


if __name__ == "__main__":
    main()
