#!/usr/bin/env python3
"""Flask application serving the validation report."""

from __future__ import annotations

from collections.abc import Callable

from flask import Flask, abort, make_response

from config import ConfigController
from core.logging import log_error
from validation.errors import UpstreamError
from validation.report import HostProbes, build_report, from_config
from validation.version_info import VersionInfoProvider

VALIDATE_PAGE = "/validate/"

WiringFactory = Callable[[], tuple[VersionInfoProvider, HostProbes]]


def _wiring_from_config() -> tuple[VersionInfoProvider, HostProbes]:
    return from_config(ConfigController.get_instance().get_config())


def create_app(wiring: WiringFactory | None = None) -> Flask:
    """Create the Flask app.

    Args:
        wiring: Returns the version provider and host probes for one request;
            defaults to the configured host.
    """

    app = Flask(__name__)
    get_wiring = wiring or _wiring_from_config

    @app.get(VALIDATE_PAGE)
    def validate():
        provider, probes = get_wiring()
        try:
            report = build_report(provider, probes)
        except UpstreamError as exc:
            log_error(f"Validation aborted: {exc}")
            abort(500)
        resp = make_response(report)
        resp.headers["Content-Type"] = "text/plain; charset=utf-8"
        return resp

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    return app
