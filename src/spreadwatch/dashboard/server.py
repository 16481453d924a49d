"""
FastAPI server for the spread dashboard.

Serves the auto-refreshing HTML page and a small JSON API on top of
one SpreadMonitor per configured instrument.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse

from spreadwatch import __version__
from spreadwatch.config.settings import Settings, get_settings
from spreadwatch.core.store import SampleStore
from spreadwatch.core.types import INSTRUMENTS
from spreadwatch.dashboard.monitor import SpreadMonitor
from spreadwatch.dashboard.templates import render_dashboard
from spreadwatch.exchange.client import PriceFetcher
from spreadwatch.telemetry.metrics import FeedMetrics


logger = logging.getLogger(__name__)


def build_monitors(
    settings: Settings,
    fetcher: PriceFetcher,
    metrics: FeedMetrics | None = None,
) -> dict[str, SpreadMonitor]:
    """
    Create one monitor per configured instrument.

    Args:
        settings: Application settings.
        fetcher: Shared upstream fetcher.
        metrics: Shared metrics collector.

    Returns:
        Monitors keyed by instrument name, in configuration order.
    """
    return {
        name: SpreadMonitor(
            pair=INSTRUMENTS[name],
            source=fetcher,
            store=SampleStore(window_ms=settings.window_ms),
            sample_interval=settings.sample_interval_seconds,
            max_chart_points=settings.max_chart_points,
            refresh_before_read=settings.refresh_before_read,
            metrics=metrics,
        )
        for name in settings.instruments
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    monitors: dict[str, SpreadMonitor] = app.state.monitors
    for monitor in monitors.values():
        await monitor.start()
    logger.info(f"Dashboard serving {', '.join(monitors)}")

    yield

    for monitor in monitors.values():
        await monitor.stop()

    fetcher: PriceFetcher | None = app.state.fetcher
    if fetcher is not None:
        await fetcher.close()


def create_app(
    settings: Settings | None = None,
    monitors: dict[str, SpreadMonitor] | None = None,
    metrics: FeedMetrics | None = None,
) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        settings: Application settings (loaded from the environment if omitted).
        monitors: Pre-built monitors; if omitted, a PriceFetcher and one
            monitor per configured instrument are created.
        metrics: Metrics collector shared with the fetcher and monitors.

    Returns:
        Configured FastAPI app. Monitors start with the app lifespan.
    """
    settings = settings or get_settings()
    metrics = metrics or FeedMetrics()
    fetcher: PriceFetcher | None = None

    if monitors is None:
        fetcher = PriceFetcher(
            primary_base_url=settings.primary_base_url,
            counter_base_url=settings.counter_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            metrics=metrics,
        )
        monitors = build_monitors(settings, fetcher, metrics)

    app = FastAPI(title="Spread Monitor", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.monitors = monitors
    app.state.metrics = metrics
    app.state.fetcher = fetcher

    app.get("/", response_class=HTMLResponse)(get_dashboard)
    app.get("/api/status")(get_status)
    app.get("/api/spread/{instrument}")(get_spread)
    app.get("/{instrument}", response_class=HTMLResponse)(get_instrument_dashboard)
    return app


def _get_monitor(request: Request, instrument: str) -> SpreadMonitor:
    monitors: dict[str, SpreadMonitor] = request.app.state.monitors
    monitor = monitors.get(instrument.upper())
    if monitor is None:
        raise HTTPException(status_code=404, detail=f"Unknown instrument: {instrument}")
    return monitor


async def _render(request: Request, instrument: str) -> HTMLResponse:
    settings: Settings = request.app.state.settings
    monitor = _get_monitor(request, instrument)
    view = await monitor.read()
    html = render_dashboard(
        view,
        instruments=list(request.app.state.monitors),
        refresh_seconds=settings.page_refresh_seconds,
    )
    return HTMLResponse(content=html)


async def get_dashboard(request: Request) -> HTMLResponse:
    monitors: dict[str, SpreadMonitor] = request.app.state.monitors
    return await _render(request, next(iter(monitors)))


async def get_instrument_dashboard(request: Request, instrument: str) -> HTMLResponse:
    return await _render(request, instrument)


async def get_spread(
    request: Request,
    instrument: str,
    refresh: bool | None = None,
) -> dict[str, Any]:
    monitor = _get_monitor(request, instrument)
    view = await monitor.read(refresh=refresh)
    return view.to_dict()


async def get_status(request: Request) -> dict[str, Any]:
    monitors: dict[str, SpreadMonitor] = request.app.state.monitors
    metrics: FeedMetrics = request.app.state.metrics
    return {
        "version": __version__,
        "instruments": {
            name: {
                "running": monitor.state.running,
                "samples": len(monitor.store),
                "ticks": monitor.state.ticks,
                "inserted": monitor.state.inserted,
                "rejected": monitor.state.rejected,
                "errors": monitor.state.errors,
                "last_tick_at": monitor.state.last_tick_at,
                "refresh_before_read": monitor.refresh_before_read,
            }
            for name, monitor in monitors.items()
        },
        "metrics": metrics.summary(),
    }
