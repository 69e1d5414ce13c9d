import argparse

from filekv.client import KeyValueClient
from filekv_console.key_value_console import KeyValueStorageShell


def main():
    parser = argparse.ArgumentParser(description='filekv shell')

    parser.add_argument('--host', dest='host', default='127.0.0.1',
                        help='Server address')

    parser.add_argument('--port', dest='port', type=int, default=5000,
                        help='Server port')

    parser.add_argument('--timeout', dest='timeout', type=int, default=1000,
                        help='Milliseconds to wait for the server')

    args = parser.parse_args()

    shell = KeyValueStorageShell(KeyValueClient(args.host, args.port, args.timeout))

    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
