import sys
from typing import List, Optional

from . lexer import Lexer
from . parser import Parser
from . resolver import Resolver
from . interpreter import Interpreter
from . ast_printer import AstPrinter


class Lox:
    """
    One interpreter session. Holds the error flags for the current run and a
    single Interpreter whose globals persist between runs, so a REPL line can
    use what earlier lines defined.
    """
    def __init__(self, interpreter: Optional[Interpreter] = None):
        self.interpreter = interpreter or Interpreter()
        self.had_error = False
        self.had_runtime_error = False

    def run(self, source: str, print_ast: bool = False):
        try:
            lexer = Lexer(source)
            tokens = lexer.scan_tokens()
            parser = Parser(tokens)
            statements = parser.parse()
            resolver = Resolver()
            # Only a tree that parsed cleanly is resolved.
            if not (lexer.had_error or parser.had_error):
                resolver.resolve(statements)
        except RecursionError:
            self._fatal("Input is nested too deeply to parse.")
            self.had_error = True
            return

        errors = lexer.errors + parser.errors + resolver.errors
        if errors:
            for error in sorted(errors, key=lambda e: e.line):
                print(error, file=sys.stderr)
            self.had_error = True
            return

        if print_ast:
            print(AstPrinter().print_program(statements))
            return

        try:
            error = self.interpreter.interpret(statements, resolver.locals)
        except RecursionError:
            self._fatal("Stack overflow.")
            self.had_runtime_error = True
            return

        if error is not None:
            print(error, file=sys.stderr)
            self.had_runtime_error = True

    def run_file(self, path: str, print_ast: bool = False):
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
        self.run(source, print_ast=print_ast)

    def run_prompt(self):
        print("Lox REPL (Ctrl+D to exit)")
        while True:
            try:
                line = input("> ")
            except (KeyboardInterrupt, EOFError):
                print("\nExiting.")
                break
            if not line: continue
            self.run(line)
            self.had_error = False
            self.had_runtime_error = False

    def _fatal(self, message: str):
        print(f"FATAL: {message}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    print_ast = False
    if '--print-ast' in args:
        args.remove('--print-ast')
        print_ast = True

    if len(args) > 1 or (print_ast and not args):
        print("Usage: lox [script] [--print-ast]", file=sys.stderr)
        return 64

    lox = Lox()
    if not args:
        lox.run_prompt()
        return 0

    try:
        lox.run_file(args[0], print_ast=print_ast)
    except OSError as e:
        print(f"FATAL: Could not read '{args[0]}': {e.strerror}", file=sys.stderr)
        return 66
    if lox.had_error: return 65
    if lox.had_runtime_error: return 70
    return 0


if __name__ == "__main__":
    sys.exit(main())
