"""
jscore - Engine
Runs the script phases in sequence: lex, parse, evaluate.
"""

import json
import sys
from typing import List, Optional, Union

from .lexer import tokenize
from .parser import Parser, ParseError
from .ast_nodes import Program
from .runtime import Environment, EvaluationError, Runtime, RuntimeValue


class ScriptError(Exception):
    """Unified script failure wrapper."""
    pass


def parse_source(source: str) -> Program:
    """Lex and parse ``source``. Raises ParseError."""
    return Parser(tokenize(source)).parse()


def run_source(
    source: str,
    environment: Optional[Environment] = None,
    emit_ast: bool = False,
    emit_tokens: bool = False,
    debug: bool = False,
) -> Union[List[RuntimeValue], str]:
    """
    Run script source text.

    Parameters
    ----------
    source       : script source code string
    environment  : bindings to evaluate against; a fresh Environment if None.
                   Passing one in keeps bindings across calls.
    emit_ast     : if True, return a JSON representation of the AST instead of running
    emit_tokens  : if True, return a JSON list of the tokens instead of parsing
    debug        : print each phase summary to stderr

    Returns
    -------
    The values produced by top-level statements, in order
    (or a JSON string if emit_ast / emit_tokens is set)

    Raises
    ------
    ScriptError on any phase failure
    """

    def log(msg):
        if debug:
            print(f"[jscore] {msg}", file=sys.stderr)

    # ── Phase 1: Lexical Analysis ─────────────────────────────────────────────
    log("Phase 1: Lexical analysis")
    if emit_tokens:
        tokens = list(tokenize(source))
        log(f"  {len(tokens)} tokens produced")
        return _tokens_to_json(tokens)

    # ── Phase 2: Parsing ──────────────────────────────────────────────────────
    log("Phase 2: Parsing")
    try:
        program = parse_source(source)
    except ParseError as e:
        raise ScriptError(str(e)) from e

    log(f"  {len(program.statements)} top-level statements")

    if emit_ast:
        return _ast_to_json(program)

    # ── Phase 3: Evaluation ───────────────────────────────────────────────────
    log("Phase 3: Evaluation")
    runtime = Runtime(environment)
    try:
        values = runtime.execute(program)
    except EvaluationError as e:
        raise ScriptError(str(e)) from e

    log(f"  {len(values)} values produced, {len(runtime.environment)} bindings")
    return values


def run_file(
    input_path: str,
    environment: Optional[Environment] = None,
    emit_ast: bool = False,
    emit_tokens: bool = False,
    debug: bool = False,
) -> Union[List[RuntimeValue], str]:
    """Read a script file and run it."""
    with open(input_path, "r", encoding="utf-8") as f:
        source = f.read()

    return run_source(
        source,
        environment=environment,
        emit_ast=emit_ast,
        emit_tokens=emit_tokens,
        debug=debug,
    )


# ── Serialization (for --emit-ast / --emit-tokens) ────────────────────────────

def _ast_to_json(node) -> str:
    return json.dumps(_node_to_dict(node), indent=2)


def _node_to_dict(node):
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return [_node_to_dict(n) for n in node]
    if not hasattr(node, '__dataclass_fields__'):
        return node  # primitive
    d = {"_type": type(node).__name__}
    for field_name in node.__dataclass_fields__:
        val = getattr(node, field_name)
        d[field_name] = _node_to_dict(val)
    return d


def _tokens_to_json(tokens) -> str:
    return json.dumps(
        [
            {"type": t.type.name, "value": t.value, "line": t.line, "column": t.column}
            for t in tokens
        ],
        indent=2,
    )
