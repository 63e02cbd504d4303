#!/usr/bin/env python3
"""
Run an open-pond simulation and print its summary.

Usage:
  python run_pond.py                                  # default scenario, clear-sky day, 14 days
  python run_pond.py --scenario batch --days 7
  python run_pond.py --weather cache/phoenix-summer.json --harvest-mode semi-continuous
  python run_pond.py --list                           # list scenario names
"""
from __future__ import annotations
import argparse
import logging
from dataclasses import fields, replace

from pondlpm.model import PondModel
from pondlpm.parameters import HarvestParams
from pondlpm.postproc import summarize
from pondlpm.scenarios import SCENARIOS, clear_sky_day
from pondlpm.weather import WeatherSource, load_season_weather


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    p.add_argument("--scenario", default="default", choices=sorted(SCENARIOS))
    p.add_argument("--weather", help="season weather JSON; default is a synthetic clear-sky day")
    p.add_argument("--profile", action="store_true", help="use the averaged profile day of --weather")
    p.add_argument("--days", type=int, default=14)
    p.add_argument("--start-hour", type=int, default=7)
    p.add_argument("--harvest-mode", choices=["none", "semi-continuous", "batch"])
    p.add_argument("--list", action="store_true", help="list scenarios and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        for name, fn in sorted(SCENARIOS.items()):
            print(f"{name:16s} {fn.__doc__.strip().splitlines()[0]}")
        return

    config = SCENARIOS[args.scenario]()
    if args.harvest_mode:
        config = replace(config, harvest=HarvestParams(
            mode=args.harvest_mode,
            threshold=config.harvest.threshold,
            target=config.harvest.target,
            return_fraction=config.harvest.return_fraction,
        ))

    if args.weather:
        weather = load_season_weather(args.weather, use_profile=args.profile)
    else:
        weather = WeatherSource.from_profile(clear_sky_day())

    model = PondModel.from_config(config)
    steps = model.run(weather, args.days, start_hour=args.start_hour)
    summary = summarize(steps)

    print(f"pond surface {model.geometry.area_surface:.0f} m², volume {model.geometry.volume:.1f} m³")
    for f in fields(summary):
        value = getattr(summary, f.name)
        print(f"{f.name:28s} {value:.4g}" if isinstance(value, float) else f"{f.name:28s} {value}")


if __name__ == "__main__":
    main()
