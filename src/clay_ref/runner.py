from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from .evaluator import eval_program
from .parser import ParseError, parse_source
from .tree import pretty
from .types import ClayRuntimeError, ClyValue, Frame
from .utils import debug_py_trace_enabled, stringify

logger = logging.getLogger(__name__)

def run(src: str, frame: Optional[Frame]=None) -> ClyValue:
    """Parse and evaluate a whole program; errors abort the run."""
    program = parse_source(src)
    if frame is None:
        frame = Frame()

    logger.debug("running program with %d top-level statement(s)", len(program.statements))

    return eval_program(program, frame)

def repl_eval(text: str, frame: Frame) -> ClyValue:
    """Evaluate one REPL entry against a frame that persists across entries."""
    program = parse_source(text)
    return eval_program(program, frame)

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - "-" => read stdin.
    - Existing path => read file contents.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if not candidate.exists():
        raise SystemExit(f"No such file: {arg}")

    return candidate.read_text(encoding="utf-8")

def _report(exc: Exception, label: str) -> None:
    print(f"Error: {label}{exc}", file=sys.stderr)

    if debug_py_trace_enabled():
        print("\nPython traceback:", file=sys.stderr)
        traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)

def _run_one(source: str, label: str, dump_ast: bool) -> int:
    try:
        if dump_ast:
            print(pretty(parse_source(source)))
            return 0

        result = run(source)
    except (ParseError, ClayRuntimeError) as exc:
        _report(exc, label)
        return 1

    print(stringify(result))
    return 0

def main(argv: Optional[List[str]]=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    dump_ast = False
    verbose = False
    inline: List[str] = []
    paths: List[str] = []
    it = iter(args)

    for token in it:
        if token == "--ast":
            dump_ast = True
            continue

        if token in ("-v", "--verbose"):
            verbose = True
            continue

        if token == "-e":
            try:
                inline.append(next(it))
            except StopIteration:
                raise SystemExit("-e flag requires source text") from None
            continue

        if token.startswith("-") and token != "-":
            raise SystemExit(f"Unexpected argument: {token}")

        paths.append(token)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if not inline and not paths:
        from .repl import repl  # prompt_toolkit is only needed interactively
        repl()
        return 0

    status = 0

    for source in inline:
        # batch mode: the first failure stops the run
        status = _run_one(source, "", dump_ast)
        if status:
            return status

    for path in paths:
        status = _run_one(_load_source(path), f"{path}: ", dump_ast)
        if status:
            return status

    return status

if __name__ == "__main__":
    sys.exit(main())
