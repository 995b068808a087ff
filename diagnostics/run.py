"""Command-line entry point for host validation."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from config import ConfigController
from core.logging import enable_file_logging, log_error, log_info, set_level
from validation.errors import UpstreamError
from validation.report import from_config, write_report


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        description="Check kernel, cgroup and container runtime compatibility."
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding default.yaml and override.yaml.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override the configured logging level.",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="Container runtime endpoint, e.g. unix:///var/run/docker.sock.",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the report over HTTP instead of printing it.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Print the validation report and return an exit code."""

    args = parse_args(argv)
    if args.config_dir is not None:
        ConfigController.load_from(args.config_dir)
    config = ConfigController.get_instance().get_config()
    if args.endpoint:
        config["runtime"] = {**config["runtime"], "endpoint": args.endpoint}

    set_level(args.log_level or config["logging_level"])
    if config["log_file"]:
        enable_file_logging(Path(config["log_file"]))

    if args.serve:
        from web.app import create_app

        http_cfg = config["http"]
        app = create_app(wiring=lambda: from_config(config))
        log_info(f"Serving validation report on {http_cfg['host']}:{http_cfg['port']}")
        app.run(host=http_cfg["host"], port=http_cfg["port"], debug=False)
        return 0

    provider, probes = from_config(config)
    try:
        write_report(sys.stdout, provider, probes)
    except UpstreamError as exc:
        log_error(f"Validation aborted: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
