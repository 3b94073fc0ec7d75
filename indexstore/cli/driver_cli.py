"""Command driver CLI.

Reads a command count and then that many commands from stdin:

    insert <key> <value>
    delete <key> <value>
    find <key>

find prints the key's values in ascending order on one line, or "null".
Input is read as bytes: keys are taken verbatim, only verbs and integers
are interpreted.
"""
import argparse
import logging
import re
import sys
from typing import BinaryIO, Iterator, TextIO

from indexstore.core.store import IndexStore
from indexstore.utils.config import Config

logger = logging.getLogger(__name__)

# Optional sign and ASCII digits only, as a C++ stream extracts an int
_INT_RE = re.compile(rb'[+-]?[0-9]+')


class CommandError(Exception):
    """Raised when the command stream cannot be parsed."""
    pass


def _next_token(tokens: Iterator[bytes], what: str) -> bytes:
    try:
        return next(tokens)
    except StopIteration:
        raise CommandError(f"Unexpected end of input, expected {what}") from None


def _next_int(tokens: Iterator[bytes], what: str) -> int:
    token = _next_token(tokens, what)
    if not _INT_RE.fullmatch(token):
        raise CommandError(f"Invalid {what}: {token!r}")
    return int(token)


def handle_insert(store, tokens, out):
    """Handle INSERT command."""
    key = _next_token(tokens, 'key')
    store.insert(key, _next_int(tokens, 'value'))


def handle_delete(store, tokens, out):
    """Handle DELETE command."""
    key = _next_token(tokens, 'key')
    store.remove(key, _next_int(tokens, 'value'))


def handle_find(store, tokens, out):
    """Handle FIND command."""
    values = store.find(_next_token(tokens, 'key'))
    if values:
        out.write(' '.join(str(v) for v in values) + '\n')
    else:
        out.write(Config.NULL_TOKEN + '\n')


HANDLERS = {
    b'insert': handle_insert,
    b'delete': handle_delete,
    b'find': handle_find,
}


def run_commands(store: IndexStore, stream: BinaryIO, out: TextIO) -> int:
    """
    Execute the command stream against store.
    Returns the number of commands read.
    """
    tokens = iter(stream.read().split())
    count = _next_int(tokens, 'command count')

    for _ in range(count):
        verb = _next_token(tokens, 'command')
        handler = HANDLERS.get(verb)
        if handler is None:
            logger.warning("Skipping unknown command %r", verb)
            continue
        handler(store, tokens, out)
    out.flush()
    return count


def main(argv=None):
    """Main entry point for the command driver."""
    parser = argparse.ArgumentParser(description='IndexStore command driver')
    parser.add_argument('--data-file', default=Config.DATA_FILENAME,
                        help=f'Log file (default: {Config.DATA_FILENAME})')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help=f'Log level for stderr (default: {Config.LOG_LEVEL})')
    args = parser.parse_args(argv)

    logging.basicConfig(stream=sys.stderr, level=args.log_level, format=Config.LOG_FORMAT)

    try:
        with IndexStore(args.data_file) as store:
            run_commands(store, sys.stdin.buffer, sys.stdout)
    except (CommandError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
