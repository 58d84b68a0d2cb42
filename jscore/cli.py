"""
jscore - Command Line Interface

Usage:
    jscore input.js [--print-env] [--debug]
    jscore -e "var a = 1; a + 2"
    jscore input.js --emit-ast | --emit-tokens
    jscore                      (interactive REPL)
    python -m jscore input.js
"""

import sys
import argparse
import traceback


REPL_PROMPT = "jscore> "
REPL_QUIT = (":q", ":quit", "quit", "exit")


def _print_values(values):
    for value in values:
        print(value)


def _print_env(env):
    for name, value in env.items():
        print(f"{name} = {value!r}")


def repl(debug: bool = False, stdin=None) -> None:
    """Read-eval-print loop sharing one Environment across lines."""
    from .engine import run_source, ScriptError
    from .runtime import Environment

    stdin = stdin if stdin is not None else sys.stdin
    env = Environment()
    print("jscore REPL. Type :q to quit.")

    while True:
        print(REPL_PROMPT, end="", flush=True)
        line = stdin.readline()
        if not line:
            print()
            break

        stripped = line.strip()
        if stripped in REPL_QUIT:
            break
        if not stripped:
            continue
        if stripped == ":env":
            _print_env(env)
            continue

        try:
            _print_values(run_source(line, environment=env, debug=debug))
        except ScriptError as e:
            if debug:
                traceback.print_exc()
            else:
                print(str(e))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="jscore",
        description="jscore - embedded script lexer, parser and evaluator",
    )
    parser.add_argument("input", nargs="?", help="Path to the script source file")
    parser.add_argument(
        "-e", "--eval",
        dest="source",
        help="Run SOURCE given on the command line instead of a file",
    )
    parser.add_argument(
        "--emit-ast",
        action="store_true",
        dest="emit_ast",
        help="Print the parsed AST as JSON instead of running",
    )
    parser.add_argument(
        "--emit-tokens",
        action="store_true",
        dest="emit_tokens",
        help="Print the token stream as JSON instead of running",
    )
    parser.add_argument(
        "--print-env",
        action="store_true",
        dest="print_env",
        help="Print the final variable bindings after running",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print phase info to stderr",
    )

    args = parser.parse_args(argv)

    from .engine import run_file, run_source, ScriptError
    from .runtime import Environment

    if args.input is None and args.source is None:
        repl(debug=args.debug)
        return

    env = Environment()
    options = dict(
        environment=env,
        emit_ast=args.emit_ast,
        emit_tokens=args.emit_tokens,
        debug=args.debug,
    )

    try:
        if args.source is not None:
            result = run_source(args.source, **options)
        else:
            result = run_file(args.input, **options)
    except FileNotFoundError:
        print(f"[jscore] Error: Input file not found: {args.input!r}", file=sys.stderr)
        sys.exit(1)
    except ScriptError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    if isinstance(result, str):
        print(result)
        return

    _print_values(result)
    if args.print_env:
        _print_env(env)


if __name__ == "__main__":
    main()
