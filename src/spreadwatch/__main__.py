"""
Entry point for the spread monitor.

Usage:
    python -m spreadwatch
    spreadwatch  # if installed via pip
"""

import sys


# uvloop is optional; uvicorn falls back to the stdlib loop without it
try:
    import uvloop  # noqa: F401

    UVLOOP_AVAILABLE = True
except ImportError:
    UVLOOP_AVAILABLE = False


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    import uvicorn
    from pydantic import ValidationError

    from spreadwatch import __version__
    from spreadwatch.config.settings import get_settings
    from spreadwatch.dashboard.server import create_app
    from spreadwatch.telemetry.logger import setup_logging

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║     CROSS-VENUE SPREAD MONITOR v{__version__:<24}      ║
║                                                               ║
║     Primary last trade vs counter best bid/ask                ║
╚═══════════════════════════════════════════════════════════════╝
    """
    )

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Configuration error: {e}")
        print("\nCheck your environment or .env file, for example:")
        print("  PORT=3000")
        print('  INSTRUMENTS=["BTC","ETH"]')
        return 1

    use_uvloop = settings.use_uvloop and UVLOOP_AVAILABLE

    print("Configuration:")
    print(f"  Instruments:    {', '.join(settings.instruments)}")
    print(f"  Sample every:   {settings.sample_interval_seconds:g}s")
    print(f"  Stats window:   {settings.window_minutes:g} min")
    print(f"  Chart points:   {settings.max_chart_points}")
    print(f"  Refresh on read:{' yes' if settings.refresh_before_read else ' no'}")
    print(f"  uvloop:         {'Enabled' if use_uvloop else 'Disabled'}")
    print(f"  Dashboard:      http://{settings.host}:{settings.port}")
    print()

    async_logger = setup_logging(level=settings.log_level)

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            loop="uvloop" if use_uvloop else "asyncio",
            log_level="warning",
        )
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 0

    finally:
        async_logger.stop()


if __name__ == "__main__":
    sys.exit(main())
