import argparse
import logging
import sys

from filekv.bootstrap import ServerBootstrap
from filekv.configuration import ServerConfiguration

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='File backed TCP key-value store')

    parser.add_argument('--host', dest='host', default='127.0.0.1',
                        help='Address to bind to')

    parser.add_argument('--port', dest='port', type=int, default=5000,
                        help='Port to listen on')

    parser.add_argument('--storage', dest='storage_path', default='.',
                        help='Directory holding one file per key')

    parser.add_argument('--log-level', dest='log_level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    configuration = ServerConfiguration(host=args.host, port=args.port, storage_path=args.storage_path)

    try:
        bootstrap = ServerBootstrap(configuration)
    except OSError as err:
        logger.error("Unable to listen on %s: %s", configuration.url(), err)
        return 1

    try:
        bootstrap.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")

    return 0


if __name__ == "__main__":
    sys.exit(main())
