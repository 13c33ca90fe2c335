#!/usr/bin/env python3
"""
Main CLI entry point for dnsmasq Manager
"""

import sys
import argparse
from .. import __version__
from ..config import ConfigError, load_config


def create_parser():
    """Create the main argument parser"""
    parser = argparse.ArgumentParser(
        prog='dnsmasq-manager',
        description='Manage dnsmasq static DHCP host reservations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'dnsmasq-manager {__version__}'
    )

    parser.add_argument(
        '--config',
        default='config',
        help='Config file name, without extension, searched in /etc/dnsmasq-manager/ and . (default: config)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Import and register subcommands
    from .hosts import register_hosts_commands
    from .serve import register_serve_commands

    register_hosts_commands(subparsers)
    register_serve_commands(subparsers)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute the command
    try:
        args.config = load_config(args.config)
        args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
