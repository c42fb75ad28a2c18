"""Entry point for spelling safari CLI client."""

import argparse
import logging
import random
import sys

from cli.api_client import SafariAPIClient
from cli.console import ConsoleUI
from core.session import GameSession


def main():
    parser = argparse.ArgumentParser(description='Spelling Safari - find the misspelled words')
    parser.add_argument(
        '--server',
        default='http://localhost:3000',
        help='Server URL (default: http://localhost:3000)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for encouragement messages (default: random)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show session log messages'
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    client = SafariAPIClient(base_url=args.server)
    session = GameSession(client, rng=random.Random(args.seed))
    ui = ConsoleUI(session)

    try:
        ui.run()
    except (KeyboardInterrupt, EOFError):
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
