import argparse

def get_base_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the YouTube playlist export API")
    parser.add_argument("-e", "--env-file", help="Path to a custom .env file", default=None)
    return parser

def add_log_level_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-l", "--log-level", help="Set log level (DEBUG, INFO, WARNING, ERROR)", default=None)

def add_host_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", help="Interface to bind (overrides HOST)", default=None)

def add_port_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-p", "--port", type=int, help="Port to listen on (overrides PORT)", default=None)
