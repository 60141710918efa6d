"""Main entry point for the protobuf metrics exposition server."""
import argparse
import logging
import sys

from promproto.api import ExpositionAPI
from promproto.config import Config, load_config


def setup_logging(log_level: str, log_format: str):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        fmt = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    logging.basicConfig(
        level=level,
        format=fmt,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Reduce noise from some libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def dump(api: ExpositionAPI, path: str):
    """Write one snapshot of the registry to ``path`` (``-`` for stdout)."""
    payload = api.render()
    if path == "-":
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    else:
        with open(path, "wb") as f:
            f.write(payload)


def main(argv=None):
    """Main function."""
    parser = argparse.ArgumentParser(
        description="Protobuf Metrics Exposition - Serve Prometheus metrics in the delimited protobuf format"
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to configuration YAML file"
    )
    parser.add_argument(
        "--dump",
        metavar="PATH",
        help="Write one snapshot to PATH ('-' for stdout) and exit"
    )

    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else Config()
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    setup_logging(config.global_.log_level, config.global_.log_format)
    logger = logging.getLogger(__name__)

    api = ExpositionAPI(config)

    if args.dump:
        try:
            dump(api, args.dump)
        except Exception as e:
            logger.error(f"Failed to write snapshot: {e}", exc_info=True)
            sys.exit(1)
        return

    logger.info(f"Configuration loaded from: {args.config or '<defaults>'}")
    logger.info(f"Framing: {config.format.framing}")
    logger.info(
        f"Serving protobuf metrics on "
        f"{config.server.host}:{config.server.port}{config.server.path}"
    )
    try:
        api.run()
    except Exception as e:
        logger.error(f"Exposition server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
