"""Command line entry point for the playlist export API server."""

import logging

import uvicorn

from src.argparse_shared import (
    add_host_argument,
    add_log_level_argument,
    add_port_argument,
    get_base_parser,
)
from src.config import Config
from src.web.app import create_app


def build_parser():
    parser = get_base_parser()
    add_log_level_argument(parser)
    add_host_argument(parser)
    add_port_argument(parser)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = Config(env_file=args.env_file)
    if args.log_level:
        config.LOG_LEVEL = args.log_level.upper()
    host = args.host or config.HOST
    port = args.port or config.PORT

    app = create_app(config)
    logging.info(f"Server starting on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
