"""Uses the lox core to interpret .lox files/run in command-line mode. Also uses error handling context manager.
Called from the lox console script (or python -m lox).

Basic program flow, for every input (a whole file, or one command-line entry):
    1. Scanner: produces the complete token list for the input (see core/scanner.py)
    2. Parser: produces the complete statement list by recursive descent (see core/parser.py, grammar in core/tree.py)
        - if 1. or 2. found any error, every error is reported and nothing is run
    3. Evaluator: walks the statements in order against one persistent scope chain (see core/evaluator.py)
        - the first runtime error stops the input
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def main(argv=None):
    """Runs lox interpreter. Returns the process exit status when the file ran (SystemExit is raised otherwise)."""
    assert sys.version_info >= (3, 8), "lox cannot be run with python < 3.8"

    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the lox language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    notation = parser.add_mutually_exclusive_group()
    notation.add_argument("--ast", action="store_true", help="print the parsed syntax tree instead of running")
    notation.add_argument("--rpn", action="store_true", help="print expressions in reverse Polish notation instead of "
                                                              "running")
    parser.add_argument("--no-color", action="store_true", help="do not colour diagnostics")
    args = parser.parse_args(argv)

    with ErrorHandler(color=not args.no_color) as error_handler:
        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return 0

        sess = Session(error_handler, args.file, cmd_line=False)

        if args.ast or args.rpn:
            source = sess.read_file()
            tree = sess.ast(source) if args.ast else sess.rpn(source)
            if tree:
                print(tree)
        else:
            sess.run_file()

    status = error_handler.exit_status()
    if status:
        sys.exit(status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
