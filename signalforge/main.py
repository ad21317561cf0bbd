"""SignalForge — application entry point.

Boots the FastAPI server and provides the CLI entry point for analysing a
series file, running a synthetic demo, or serving the API.
"""

import json
import logging
import sys

from fastapi import FastAPI

from signalforge.api.routers import router

app = FastAPI(title="SignalForge Analysis API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("signalforge")

# Demo series parameters: (base price, daily volatility).
_DEMO_ASSETS = {
    "Gold": (2650.0, 0.015),
    "Silver": (31.5, 0.025),
    "Copper": (4.25, 0.02),
}


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _emit(analysis, as_json: bool) -> None:
    from signalforge.cli.dashboard import render_analysis

    if as_json:
        print(json.dumps(analysis.to_dict(), indent=2))
    else:
        render_analysis(analysis)


def _run_analyze(args, config) -> int:
    from signalforge.data.loader import load_series
    from signalforge.engine.analysis import analyze
    from signalforge.engine.validation import SeriesValidationError, parse_price

    try:
        price = parse_price(args.price, "--price") if args.price is not None else None
        series = load_series(args.input)
        analysis = analyze(
            series,
            args.asset,
            current_price=price,
            validate=config.validate_input,
        )
    except (OSError, ValueError) as exc:
        # SeriesValidationError is a ValueError.
        kind = "Invalid series" if isinstance(exc, SeriesValidationError) else "Cannot analyse"
        logger.error("%s %s: %s", kind, args.input, exc)
        return 1

    logger.info(
        "%s: %s %s at %.2f (%d candles)",
        args.asset, analysis.signal.type, analysis.signal.strength,
        analysis.current_price, len(series),
    )
    _emit(analysis, args.json)
    return 0


def _run_demo(args) -> int:
    from signalforge.data.synthetic import generate_price_history
    from signalforge.engine.analysis import analyze

    base_price, volatility = _DEMO_ASSETS.get(args.asset, (100.0, 0.02))
    try:
        series = generate_price_history(base_price, volatility, days=args.days, seed=args.seed)
    except ValueError as exc:
        logger.error("Cannot generate demo series for %s: %s", args.asset, exc)
        return 1

    analysis = analyze(series, args.asset)
    logger.info(
        "%s (synthetic): %s %s at %.2f (%d candles)",
        args.asset, analysis.signal.type, analysis.signal.strength,
        analysis.current_price, len(series),
    )
    _emit(analysis, args.json)
    return 0


def _run_server(config) -> int:
    import uvicorn

    from signalforge.api.routers import configure_routers

    configure_routers(config)
    logger.info("Serving SignalForge API on %s:%d", config.api_host, config.api_port)
    uvicorn.run(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    )
    return 0


def _run_cli(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and dispatch to the requested command."""
    import argparse

    from signalforge.config import load_config

    parser = argparse.ArgumentParser(description="SignalForge technical analysis")
    sub = parser.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyse a JSON or CSV price series")
    p_analyze.add_argument("--input", required=True, help="Path to a .json or .csv series")
    p_analyze.add_argument("--asset", default="Asset", help="Asset display name")
    p_analyze.add_argument("--price", type=float, default=None,
                           help="Current price (default: last close)")
    p_analyze.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p_demo = sub.add_parser("demo", help="Analyse a synthetic series")
    p_demo.add_argument("--asset", default="Gold", help="Gold, Silver, Copper or any name")
    p_demo.add_argument("--seed", type=int, default=None, help="Random seed")
    p_demo.add_argument("--days", type=int, default=90, help="Days of history")
    p_demo.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    sub.add_parser("serve", help="Run the HTTP API")

    args = parser.parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "analyze":
        return _run_analyze(args, config)
    if args.command == "demo":
        return _run_demo(args)
    return _run_server(config)


if __name__ == "__main__":
    sys.exit(_run_cli())
