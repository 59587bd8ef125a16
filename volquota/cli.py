"""Command-line interface for check_volquota."""

import argparse
import sys
from dataclasses import asdict
from pathlib import Path

from volquota import __version__
from volquota.core.config import ProbeConfig, as_int, load_settings
from volquota.core.context import Context
from volquota.core.errors import ConfigError, ContactError, QueryTimeout, VolumeNotFound
from volquota.core.logging import ProbeLogger, get_log_path
from volquota.core.output import Output, Verdict
from volquota.lib.units import get_formatter
from volquota.parsers import filter_volumes, get_parser
from volquota.query import query, resolve_dialect
from volquota.report import aggregate, check_volume


class ProbeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors become UNKNOWN results."""

    def error(self, message: str):
        raise ConfigError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = ProbeArgumentParser(
        prog="check_volquota",
        description="Check volume quota usage on a distributed filesystem server",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"check_volquota {__version__}",
    )
    parser.add_argument(
        "-c",
        "--critical",
        type=int,
        help="Critical when percent used exceeds this (default: 90)",
    )
    parser.add_argument(
        "-w",
        "--warning",
        type=int,
        help="Warning when percent used exceeds this (default: 85)",
    )
    parser.add_argument("-H", "--hostname", help="Check every volume on this server")
    parser.add_argument("-n", "--volume", help="Check a single volume")
    parser.add_argument("-p", "--partition", help="Limit --hostname to one partition")
    parser.add_argument("-r", "--regex", help="Only report volumes matching this pattern")
    parser.add_argument(
        "-T",
        "--server-type",
        choices=["primary", "alternate"],
        help="Server implementation (default: detect)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        help="Abort the query after this many seconds (default: 300)",
    )
    parser.add_argument(
        "--human-readable",
        action="store_true",
        help="Show sizes as KiB/MiB/GiB instead of kilobytes",
    )
    parser.add_argument("--config", type=Path, help="YAML file with default settings")
    parser.add_argument("-d", "--debug", action="store_true", help="Trace to stderr")
    return parser


def _pick(option, setting):
    return setting if option is None else option


def build_config(argv: list[str] | None, context: Context) -> ProbeConfig:
    """
    Parse arguments and merge them over the configuration files.

    Raises:
        ConfigError: On any usage or configuration problem
    """
    opts = create_parser().parse_args(argv)
    settings = load_settings(opts.config)

    dialect = resolve_dialect(
        _pick(opts.server_type, settings["server_type"]),
        context,
        settings["marker_file"],
    )
    log_dir = settings["log_dir"]

    config = ProbeConfig(
        dialect=dialect,
        volume=opts.volume,
        host=opts.hostname,
        partition=opts.partition,
        pattern=opts.regex,
        warning=as_int(_pick(opts.warning, settings["warning"]), "warning"),
        critical=as_int(_pick(opts.critical, settings["critical"]), "critical"),
        timeout=as_int(_pick(opts.timeout, settings["timeout"]), "timeout"),
        vos_path=settings["vos_path"],
        human_readable=opts.human_readable or bool(settings["human_readable"]),
        debug=opts.debug,
        log_dir=Path(log_dir).expanduser() if log_dir else None,
    )
    config.validate()
    return config


def make_logger(config: ProbeConfig) -> ProbeLogger:
    """Logger writing to the configured log dir and, with --debug, stderr."""
    return ProbeLogger(
        log_path=get_log_path(base_path=config.log_dir) if config.log_dir else None,
        stream=sys.stderr if config.debug else None,
        min_level="debug" if config.debug else "info",
    )


def check_single(config: ProbeConfig, context: Context, logger: ProbeLogger) -> tuple[Verdict, str]:
    """Examine one volume."""
    lines = query(config, context, logger)
    record = get_parser(config.dialect).parse_volume(lines)
    if record is None or not record.is_valid:
        raise VolumeNotFound(config.volume)

    logger.debug("parsed volume", **asdict(record))
    result = check_volume(record, config.warning, config.critical, get_formatter(config.human_readable))
    return result.verdict, result.summary


def check_server(config: ProbeConfig, context: Context, logger: ProbeLogger) -> tuple[Verdict, str]:
    """List and evaluate every volume on a server or partition."""
    lines = query(config, context, logger)
    volumes = get_parser(config.dialect).parse_server(lines)
    volumes = filter_volumes(volumes, config.pattern)
    logger.debug("parsed server", volumes=len(volumes))

    fmt = get_formatter(config.human_readable)
    results = []
    for record in volumes.values():
        result = check_volume(record, config.warning, config.critical, fmt)
        logger.debug("volume", summary=result.summary, verdict=result.verdict.name)
        results.append(result)

    return aggregate(results)


def describe_target(config: ProbeConfig) -> str:
    """Human name for what was queried."""
    if config.server_mode:
        if config.partition:
            return f"server {config.host} partition {config.partition}"
        return f"server {config.host}"
    return f"volume {config.volume}"


def run_probe(config: ProbeConfig, context: Context, logger: ProbeLogger) -> tuple[Verdict, str]:
    """Run the check for config and map failures to verdicts."""
    check = check_server if config.server_mode else check_single
    try:
        return check(config, context, logger)
    except QueryTimeout as e:
        logger.error("query timed out", timeout=e.timeout)
        return Verdict.CRITICAL, f"{e} waiting for vos on {describe_target(config)}"
    except ContactError as e:
        logger.error("cannot contact server", error=str(e))
        if config.server_mode:
            return Verdict.CRITICAL, f"cannot contact server {config.host}: {e}"
        return Verdict.CRITICAL, f"cannot contact server: {e}"
    except VolumeNotFound as e:
        logger.warning("volume not found", volume=e.name)
        return Verdict.CRITICAL, str(e)


def main(argv: list[str] | None = None, context: Context | None = None) -> int:
    """Main entry point."""
    context = context or Context()
    output = Output()

    try:
        config = build_config(argv, context)
    except ConfigError as e:
        output.set_result(Verdict.UNKNOWN, str(e))
        output.render()
        return output.exit_code

    with make_logger(config) as logger:
        logger.debug("configuration", **asdict(config))
        verdict, message = run_probe(config, context, logger)
        output.set_result(verdict, message)
        logger.info("result", verdict=verdict.name, summary=message)

    output.render()
    return output.exit_code


if __name__ == "__main__":
    sys.exit(main())
