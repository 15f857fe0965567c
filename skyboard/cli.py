"""CLI entry point for the skyboard weather proxy."""

import argparse
import asyncio
import logging

from skyboard.client.favorites import FavoritesStore
from skyboard.client.storage import SqliteStorage
from skyboard.config.loader import (
    get_config_value,
    load_config,
    save_config_value,
    set_config_value,
)
from skyboard.config.schema import AppConfig
from skyboard.ingest.units import wind_direction
from skyboard.models.common import Units
from skyboard.models.errors import WeatherError
from skyboard.reporting.health_checker import HealthChecker
from skyboard.storage.database import connect, run_migrations

DEFAULT_CONFIG = "config/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skyboard",
        description="Weather dashboard proxy and client tools",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--db", default=None, help="Client state DB path (default from config)"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP proxy")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # weather
    weather_p = sub.add_parser("weather", help="Show weather for a city")
    weather_p.add_argument("city")
    weather_p.add_argument(
        "--units", choices=[u.value for u in Units], default=None
    )

    # favorites list / add / remove
    fav_p = sub.add_parser("favorites", help="Manage favorite cities")
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="List favorite cities")
    add_p = fav_sub.add_parser("add", help="Add a favorite city")
    add_p.add_argument("name")
    rm_p = fav_sub.add_parser("remove", help="Remove a favorite city")
    rm_p.add_argument("name")

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "favorites":
        return _cmd_favorites(config, args)
    elif args.command == "health":
        return _cmd_health(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from skyboard.server.app import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_weather(config: AppConfig, args) -> int:
    from skyboard.server.app import build_adapter

    units = Units(args.units) if args.units else config.server.default_units
    adapter = build_adapter(config)
    try:
        report = asyncio.run(adapter.get_report(units, city=args.city))
    except WeatherError as e:
        print(f"Error ({e.status_code}): {e.message}")
        return 1

    temp_unit = "°F" if units == Units.IMPERIAL else "°C"
    speed_unit = "mph" if units == Units.IMPERIAL else "km/h"
    now = report.current
    print(f"{now.city_name}, {now.country_code} ({report.timezone})")
    print(
        f"  {now.temperature}{temp_unit} (feels {now.feels_like}{temp_unit}), "
        f"{now.condition_description}"
    )
    print(
        f"  Humidity {now.humidity_pct:.0f}% | Wind {now.wind_speed} {speed_unit} "
        f"{wind_direction(now.wind_degrees)} | Pressure {now.pressure:.0f} hPa"
    )
    for day in report.daily:
        print(
            f"  {day.date}: {day.temp.min}..{day.temp.max}{temp_unit} "
            f"{day.condition.description}"
        )
    return 0


def _cmd_favorites(config: AppConfig, args) -> int:
    storage = SqliteStorage.open(args.db or config.client.state_db)
    try:
        store = FavoritesStore.create(storage, key=config.client.favorites_key)
        if args.favorites_command == "list":
            names = store.list()
            if not names:
                print("No favorite cities")
            for name in names:
                print(name)
            return 0
        elif args.favorites_command == "add":
            if store.add(args.name):
                print(f"Added {args.name.strip()}")
            else:
                print(f"{args.name.strip()} is already a favorite")
            return 0
        elif args.favorites_command == "remove":
            if store.remove(args.name):
                print(f"Removed {args.name.strip()}")
                return 0
            print(f"{args.name.strip()} is not a favorite")
            return 1
        else:
            print("Use: favorites list | favorites add NAME | favorites remove NAME")
            return 1
    finally:
        storage.close()


def _cmd_health(config: AppConfig, args) -> int:
    conn = connect(args.db or config.client.state_db)
    run_migrations(conn)
    checker = HealthChecker(config, conn)
    status = checker.check()

    print(f"API key: {'OK' if status.api_key_configured else 'MISSING'}")
    print(f"Weather provider: {'OK' if status.upstream_reachable else 'FAIL'}")
    print(f"State DB: {'OK' if status.state_db_connected else 'FAIL'}")
    print(f"Environment: {status.environment}")
    print(f"Other cities: {status.other_cities} | Known cities: {status.known_cities}")
    conn.close()
    return 0 if status.upstream_reachable and status.state_db_connected else 1


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            key = key.strip()
            new_config = set_config_value(config, key, value.strip())
            save_config_value(args.config, new_config, key)
            print(f"Set {key} = {get_config_value(new_config, key)} in {args.config}")
            return 0
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1

