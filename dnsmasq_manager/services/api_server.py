"""
API server service wrapper
"""

from ..cli.main import main as cli_main


def main():
    """Main entry point for the API server service"""
    cli_main(['serve'])


if __name__ == '__main__':
    main()
