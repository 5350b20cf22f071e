"""
Little Mat Calculator

This is the terminal front end for the matrix calculator.

Workflow:
1. With no arguments an interactive session starts. Each line typed is fed to
   the session as one fragment; the session decides whether the statement is
   complete or more lines are needed.
2. With a file argument every line of the file is fed to one session and the
   results are printed.
3. Lines starting with ``.`` while no input is pending are commands
   (``.help``, ``.quit``, ``.evalf <path>``, ``.vars``).

Set ``MATCALC_DEBUG`` to print the tokens and AST of each complete buffer.
"""
import logging
import sys

from matcalc import new_session, startup_text
from matcalc.builtins import help_text
from matcalc.config import Config
from matcalc.interpreter import format_expr
from matcalc.lexer import tokenize
from matcalc.matrix import format_value
from matcalc.parser import Complete, parse_program
from matcalc.session import ERROR_PROMPT, RESULT_PROMPT, Session

HELP_TEXT = """\
AVAILABLE INTERPRETER COMMANDS
    .quit            exits the interpreter
    .evalf <path>    evaluates the file at <path>
    .vars            lists the variables of this session
    .help            displays this message

HELP ON THE CALCULATOR SYNTAX
    Numbers, variables and matrices combine with + - * / and ^.
    Matrices are written row by row: [1, 2; 3, 4]. A newline also ends a row.
    Assign with `name = expression`. Statements are separated by newlines
    or `;`. An unfinished statement continues on the next line.
"""


def print_usage():
    """
    Print usage.
    """
    print()
    print("Little Mat Calculator")
    print()
    print("Usage:")
    print("    mcalc [<script>]")
    print()
    print("Arguments:")
    print("    <script>")
    print("        Path to a file of calculator statements to evaluate. Lines")
    print("        starting with '#' are ignored.")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")


def debug_print_tokens_ast(source: str):
    """
    Print tokenized source and AST
    """
    tokens = tokenize(source)
    print("\nTokens:\n")
    print(tokens)
    outcome = parse_program(tokens)
    print("\nAST:\n")
    if isinstance(outcome, Complete):
        for stmt in outcome.node:
            print(stmt)
            print(f"    {format_expr(stmt)}")
    else:
        print(outcome)
    print(" ")


def strip_anno_lines(source: str) -> list[str]:
    """
    Drop lines starting with ``#``.
    """
    return [line for line in source.splitlines() if not line.startswith('#')]


def feed(session: Session, line: str) -> bool:
    """
    Feed a line to the session and print any output.

    Returns:
        bool: False if the line produced an error.
    """
    if session.config.debug:
        debug_print_tokens_ast(
            session.pending_source() + "\n" + line if session.buffer else line
        )
    result = session.evaluate(line)
    if result.output:
        marker = ERROR_PROMPT if result.error else RESULT_PROMPT
        for out_line in result.output.splitlines():
            print(f"{marker}{out_line}")
    return not result.error


def eval_file(session: Session, path: str) -> bool:
    """
    Evaluate every line of a file in ``session``.

    Returns:
        bool: False if any statement failed or the file ended mid-statement.
    """
    with open(path, "r", encoding="utf-8") as f:
        source = f.read()
    ok = True
    for line in strip_anno_lines(source):
        ok = feed(session, line) and ok
    if session.buffer:
        print(f"{ERROR_PROMPT}SyntaxError: unexpected end of file in {path}")
        session.buffer.clear()
        ok = False
    return ok


def command(cmd: str, session: Session) -> bool:
    """
    Run a ``.`` command.

    Returns:
        bool: False when the REPL should stop.
    """
    if cmd == ".quit":
        return False
    if cmd.startswith(".evalf "):
        path = cmd[len(".evalf "):].strip()
        try:
            eval_file(session, path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"{type(e).__name__}: {e}")
    elif cmd == ".help":
        print(HELP_TEXT)
        print(help_text())
    elif cmd == ".vars":
        for name, value in sorted(session.env.snapshot().items()):
            print(f"    {name} = {format_value(value, session.config.precision)}")
    else:
        print("No such command. Type .help for help")
    return True


def run_script(script_name: str, config: Config) -> int:
    """
    Run a calculator script
    """
    session = new_session(config)
    try:
        ok = eval_file(session, script_name)
    except (OSError, UnicodeDecodeError) as e:
        print(f"{type(e).__name__}: {e}")
        return 1
    return 0 if ok else 1


def run_repl(config: Config):
    """
    Run the interactive REPL
    """
    print(startup_text())
    session = new_session(config)
    while True:
        try:
            line = input(session.prompt)
            if not session.buffer and line.strip().startswith('.'):
                if not command(line.strip(), session):
                    break
                continue
            feed(session, line)
        except KeyboardInterrupt:
            if session.buffer:
                # Abandon the pending statement, keep the session
                session.buffer.clear()
                print()
                continue
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - One argument equal to ``-h`` or ``--help``: print usage and exit.
    - One argument that is not an option: treat it as the path to a script and run it.
    - Any other pattern: print usage and return a non-zero exit code.
    """
    args = argv[1:]
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"ConfigError: {e}")
        return 2
    if config.debug:
        logging.basicConfig(level=logging.DEBUG)

    if not args:
        run_repl(config)
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0], config)
    print_usage()
    return 1


def entry_point():
    """
    Console script wrapper around :func:`main`.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    entry_point()
