# client.py

import argparse
from termline import ClientConfig, Interface

def main():
    parser = argparse.ArgumentParser(description='termline example client')
    parser.add_argument('-e', '--endpoint',
        default='http://127.0.0.1:8080',
        help='Base URL of the remote terminal')
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout)')

    args = parser.parse_args()

    # Poll a little slower than the default and stop with the program
    config = ClientConfig(
        endpoint=args.endpoint,
        poll_interval=0.5,
        stop_when_finished=True,
        logging_enabled=args.enable_logging,
        log_file=args.log_file
    )

    Interface(config=config).start()

if __name__ == "__main__":
    main()
