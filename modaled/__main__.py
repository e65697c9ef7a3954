"""modaled CLI entry point.

Allows running via `python -m modaled` and provides the console script
defined in `pyproject.toml`.

Usage:
    modaled [--log FILE] [FILENAME]
    modaled --version
    modaled --keytest
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import EditorConfig, load_config
from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: modaled [--log FILE] [FILENAME] | --version | --keytest"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(config: EditorConfig, log_file: Optional[str] = None) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    target = log_file or config.log_file
    if not target:
        return
    level = logging.DEBUG if log_file else getattr(logging, config.log_level)
    logging.basicConfig(
        filename=target,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyType

    with TerminalInterface() as term:
        kb = KeyboardHandler(term)
        # Raw mode: lines need an explicit carriage return
        print("Keyboard test mode - press keys to see parsed events. Quit with ESC.", end='\r\n')
        while True:
            ev = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                break
            print(f"type={ev.key_type.value} value={_escape_bytes(ev.value)} "
                  f"raw='{_escape_bytes(ev.raw)}' kind={ev.kind.value}", end='\r\n', flush=True)


def parse_args(args: list[str]) -> tuple[Optional[str], Optional[str]]:
    """Return (log_file, filename) from the remaining command line.

    Raises:
        ValueError: on a missing option argument or unexpected extras.
    """
    log_file = None
    filename = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '--log':
            if i + 1 >= len(args):
                raise ValueError("--log needs a file name")
            log_file = args[i + 1]
            i += 2
            continue
        if filename is not None:
            raise ValueError(f"unexpected argument: {arg}")
        filename = arg
        i += 1
    return log_file, filename


def main() -> None:
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    config = load_config()

    if args and args[0] in ('--keytest', '--keyboard-test'):
        from .terminal import TerminalError
        try:
            run_keyboard_test()
        except TerminalError as e:
            print(f"modaled: {e}", file=sys.stderr)
            sys.exit(1)
        return

    try:
        log_file, filename = parse_args(args)
    except ValueError as e:
        print(f"modaled: {e}\n{USAGE}", file=sys.stderr)
        sys.exit(2)
    configure_logging(config, log_file)

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .terminal import TerminalError
    editor = Editor(config=config)
    if filename:
        editor.load_file(filename)
    try:
        editor.run()
    except TerminalError as e:
        logger.error(f"Terminal failure: {e}")
        print(f"modaled: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
