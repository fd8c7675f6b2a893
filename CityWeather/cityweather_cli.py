"""Command-line weather lookup by city name."""
import argparse
import json
import logging
import os
import sys
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from openmeteo_geocoder import OpenMeteoGeocoder
from weather_layout import render_current, render_forecast, render_suggestions
from openmeteo_provider import OpenMeteoProvider
from weather_provider import NotFoundError, WeatherProviderError
from weather_service import WeatherService

DEFAULT_TIMEOUT = 10.0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("City weather lookup")
    parser.add_argument("city", help="City name (or partial name with --search)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--forecast", action="store_true", help="Only show the 5-day forecast")
    mode.add_argument("--current", action="store_true", help="Only show current conditions")
    mode.add_argument("--search", action="store_true", help="List matching city names")
    parser.add_argument("--units", choices=["metric", "imperial"], default="metric")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of text")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config(timeout: Optional[float] = None) -> Tuple[str, str, float]:
    load_dotenv()
    base_url = os.getenv("CITYWEATHER_BASE_URL", OpenMeteoProvider.BASE_URL)
    geo_base_url = os.getenv("CITYWEATHER_GEO_BASE_URL", OpenMeteoGeocoder.BASE_URL)

    if timeout is None:
        raw_timeout = os.getenv("CITYWEATHER_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise SystemExit(f"Invalid CITYWEATHER_TIMEOUT: {exc}") from exc
    if timeout <= 0:
        raise SystemExit(f"Timeout must be positive (got {timeout})")

    logging.info("Configuration loaded: base_url=%s geo_base_url=%s timeout=%s", base_url, geo_base_url, timeout)
    return base_url, geo_base_url, timeout


def build_weather_service(base_url: str, geo_base_url: str, timeout: float) -> WeatherService:
    geocoder = OpenMeteoGeocoder(base_url=geo_base_url, timeout=timeout)
    provider = OpenMeteoProvider(base_url=base_url, timeout=timeout)
    logging.info("Weather service ready")
    return WeatherService(geocoder=geocoder, provider=provider)


def run(service: WeatherService, args: argparse.Namespace) -> List[str]:
    """Perform the requested lookup and return the lines to print."""
    if args.search:
        suggestions = service.search_cities(args.city)
        if args.json:
            return [json.dumps([s.to_dict() for s in suggestions], indent=2)]
        return render_suggestions(suggestions)

    if args.current:
        current = service.get_current_weather(args.city)
        if args.json:
            return [json.dumps(current.to_dict(), indent=2)]
        return render_current(current, args.units)

    if args.forecast:
        forecast = service.get_forecast_weather(args.city)
        if args.json:
            return [json.dumps(forecast.to_dict(), indent=2)]
        return render_forecast(forecast, args.units)

    report = service.get_report(args.city)
    if args.json:
        return [json.dumps(report.to_dict(), indent=2)]
    return render_current(report.current, args.units) + [""] + render_forecast(report.forecast, args.units)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    base_url, geo_base_url, timeout = load_config(args.timeout)
    service = build_weather_service(base_url, geo_base_url, timeout)

    try:
        lines = run(service, args)
    except NotFoundError:
        logging.error("City not found: %s", args.city)
        print(f"We couldn't find weather data for \"{args.city}\". Please try another city.", file=sys.stderr)
        return 1
    except WeatherProviderError as err:
        logging.error("Weather lookup failed: %s", err)
        print(f"Weather lookup failed: {err}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
