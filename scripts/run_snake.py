#!/usr/bin/env python3
"""
Run a snake evolution.

Usage:
    python scripts/run_snake.py
    python scripts/run_snake.py --config examples/configs/config_snake.ini
    python scripts/run_snake.py --generations 100 --threads 8 --save
    python scripts/run_snake.py --load --save-path data/best_net.json
"""

import argparse
import logging
import sys

from evosnake import Config, ConsoleReporter, EvosnakeError, Simulation


def main():
    parser = argparse.ArgumentParser(description='Evolve neural networks playing snake')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to an INI configuration file (defaults are used otherwise)')
    parser.add_argument('--generations', type=int, default=None,
                        help='Number of generations to run (default: until Ctrl-C)')
    parser.add_argument('--population', type=int, default=None,
                        help='Number of agents per generation')
    parser.add_argument('--threads', type=int, default=None,
                        help='Number of worker threads (-1 = all cores)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random number generators')
    parser.add_argument('--save', action='store_true',
                        help='Save every improved champion')
    parser.add_argument('--save-path', type=str, default=None,
                        help='Where champions are saved')
    parser.add_argument('--load', action='store_true',
                        help='Seed the first generation from a saved champion')
    parser.add_argument('--load-path', type=str, default=None,
                        help='Where the champion is loaded from')
    parser.add_argument('--quiet', action='store_true',
                        help='Do not print generation reports')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    overrides = {
        'max_generations': args.generations,
        'population_size': args.population,
        'num_threads'    : args.threads,
        'seed'           : args.seed,
        'save_path'      : args.save_path,
        'load_path'      : args.load_path,
    }
    overrides = {name: value for name, value in overrides.items() if value is not None}
    if args.save:
        overrides['save_best_net'] = True
    if args.load:
        overrides['load_best_net'] = True

    try:
        config = Config(args.config).replace(**overrides)
        simulation = Simulation(config, ConsoleReporter(suppress_output=args.quiet))
        simulation.run()
    except EvosnakeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
