"""CLI entry point for nftgen.

This module provides the subcommand-based CLI for the generator.

Usage:
    python -m nftgen generate <male|m|female|f|banner|b> [-o nft.png]
    python -m nftgen g female -o output/5.png --seed 42
    python -m nftgen tables male                # Show rarity tables

Author:
    Jake Meador <jameador13@gmail.com>
"""

import argparse
import logging
import sys

import yaml

from . import config, rarity
from .errors import GenerationError, UnsupportedVariant
from .generator import run
from .variants import VARIANT_ALIASES, resolve_variant

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = ['main']

logger = logging.getLogger('nftgen')


def cmd_generate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Generate one image and its metadata."""
    try:
        resolve_variant(args.selector)
    except UnsupportedVariant:
        parser.error(f'incorrect variant param "{args.selector}". Run `nftgen generate --help`')

    config_overrides = {}
    if args.set:
        set_overrides = config.parse_set_string(args.set)
        logger.debug(f'Parsed --set: {set_overrides}')
        config_overrides = config.merge_dicts(config_overrides, set_overrides)

    if args.data_dir:
        config_overrides['data_dir'] = args.data_dir

    try:
        image_path, metadata_path = run(
            args.selector,
            output_path=args.output,
            config_path=args.config,
            config_overrides=config_overrides or None,
            save_overrides=args.save,
            seed=args.seed,
            debug=args.debug,
            log_file=args.log_file,
        )
    except (GenerationError, OSError, ValueError, yaml.YAMLError) as e:
        print(f'ERROR: {e}', file=sys.stderr)
        if args.debug:
            raise
        sys.exit(1)

    print(f'✓ Image: {image_path}')
    print(f'✓ Metadata: {metadata_path}')


def cmd_tables(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Print the rarity tables of a variant with selection probabilities."""
    try:
        variant = resolve_variant(args.selector)
    except UnsupportedVariant as e:
        parser.error(str(e))

    width, height = variant.canvas_size
    print(f'{variant.name} ({variant.label or "no label"}), canvas {width}x{height}')
    print('=' * 50)

    for category in variant.categories:
        if category.table.dependent:
            print(f'\n{category.trait_type} (depends on {category.parent}):')
            for parent_label, options in category.table.mapping.items():
                print(f'  {parent_label}:')
                for label, probability in rarity.probabilities(options):
                    print(f'    {label:<28} {probability:6.1%}')
        else:
            print(f'\n{category.trait_type}:')
            for label, probability in rarity.probabilities(category.table.options):
                print(f'  {label:<30} {probability:6.1%}')


def main() -> None:
    """Parse CLI arguments and execute subcommand."""
    parser = argparse.ArgumentParser(
        prog='nftgen',
        description='nftgen - NFT generator service CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest='command', help='Subcommands')
    selectors = ', '.join(VARIANT_ALIASES)

    # GENERATE subcommand
    generate_parser = subparsers.add_parser('generate', aliases=['g'], help='Generates random avatar')
    generate_parser.add_argument('selector', metavar='<(male|m)|(female|f)|(banner|b)>',
                                 help=f'Variant to generate ({selectors})')
    generate_parser.add_argument('-o', '--output', type=str, default='nft.png',
                                 help='Output file name (default: nft.png)')
    generate_parser.add_argument('--config', type=str, help='Path to config file (JSON or YAML)')
    generate_parser.add_argument('--data-dir', type=str, help='Asset data directory')
    generate_parser.add_argument('--seed', type=int, help='Fixed random seed')
    generate_parser.add_argument('--set', type=str, metavar='KEY=VALUE ...',
                                 help='Set config values')
    generate_parser.add_argument('--save', action='store_true', help='Save changes to config')
    generate_parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    generate_parser.add_argument('--log-file', type=str, help='Write logs to file')
    generate_parser.set_defaults(func=cmd_generate)

    # TABLES subcommand
    tables_parser = subparsers.add_parser('tables', help='Show rarity tables')
    tables_parser.add_argument('selector', help=f'Variant to inspect ({selectors})')
    tables_parser.set_defaults(func=cmd_tables)

    args = parser.parse_args()

    if hasattr(args, 'func'):
        args.func(args, parser)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == '__main__':
    main()
