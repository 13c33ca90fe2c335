"""
API server command
"""

import logging

from ..api import create_app
from ..log import setup_logging_from_config

logger = logging.getLogger(__name__)


def register_serve_commands(subparsers):
    """Register the serve command"""
    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API server')
    serve_parser.add_argument('--host', help='Listen address (default: from configuration)')
    serve_parser.add_argument('--port', type=int, help='Listen port (default: from configuration)')
    serve_parser.set_defaults(func=serve)


def serve(args):
    """Run the HTTP API server"""
    config = args.config
    if args.host:
        config.server_host = args.host
    if args.port:
        config.server_port = args.port

    setup_logging_from_config(config)
    app = create_app(config)

    logger.info(f"Serving static hosts from {config.host_static_file} "
                f"on {config.server_host}:{config.server_port}")
    app.run(host=config.server_host, port=config.server_port)
