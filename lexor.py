"""
LEXOR Language Interpreter

This is the main entry point for the LEXOR language interpreter.

Workflow:
1. The source script is read from the file specified on the command line.
2. The Lexer tokenizes the source code into meaningful tokens.
3. The Parser processes tokens into an AST following the language grammar.
4. If no lexical or syntax error was reported, the Interpreter walks the AST,
   evaluating expressions and executing statements.

Exit status is 65 when the script has a lexical or syntax error and 70 when it
stops on a runtime error.
"""
import os
import sys

from lexorlang.diagnostics import Diagnostics
from lexorlang.interpreter import Interpreter
from lexorlang.lexer import tokenize
from lexorlang.parser import Parser
from lexorlang.printer import AstPrinter

EXIT_STATIC_ERROR = 65
EXIT_RUNTIME_ERROR = 70


def print_usage():
    """
    Print usage.
    """
    print()
    print("LEXOR Language Interpreter")
    print()
    print("Usage:")
    print("    lexor <script.lexor>")
    print()
    print("Arguments:")
    print("    <script.lexor>")
    print("        Path to a LEXOR source file to execute. The program must be")
    print("        wrapped in 'SCRIPT AREA' / 'START SCRIPT' ... 'END SCRIPT'.")
    print()
    print("Example:")
    print("    lexor hello.lexor")
    print()
    print("Or run with no arguments to enter interactive mode (REPL).")
    print()
    print("Options:")
    print("    -h, --help")
    print("        Show this help message and exit.")
    print()
    print("Environment:")
    print("    LEXORDEBUG")
    print("        When set, print the tokens and AST before running.")


def debug_print_tokens_ast(tokens, ast):
    """
    Print tokenized source and AST
    """
    print("\nTokens:\n")
    print(tokens)
    print("\nAST:\n")
    print(AstPrinter().print(ast))
    print(" ")


def run(source: str, diagnostics: Diagnostics, interpreter: Interpreter | None = None):
    """
    Tokenize, parse and, if both succeeded, execute one program.

    Returns:
        Interpreter | None: The interpreter that ran the program, or None if
        the program was not executed.
    """
    tokens = tokenize(source, diagnostics)
    ast = Parser(tokens, diagnostics).parse()
    if diagnostics.had_error or ast is None:
        return None

    if os.environ.get('LEXORDEBUG'):
        debug_print_tokens_ast(tokens, ast)

    if interpreter is None:
        interpreter = Interpreter(diagnostics)
    interpreter.interpret(ast)
    return interpreter


def run_script(script_name: str) -> int:
    """
    Run a LEXOR script and return its exit status.
    """
    with open(script_name, "r", encoding="utf-8") as f:
        code = f.read()

    diagnostics = Diagnostics(sys.stderr)
    run(code, diagnostics)
    if diagnostics.had_error:
        return EXIT_STATIC_ERROR
    if diagnostics.had_runtime_error:
        return EXIT_RUNTIME_ERROR
    return 0


def run_repl():
    """
    Run the interactive REPL.

    Lines are collected until ``END SCRIPT``, then the program runs with a
    fresh interpreter and a cleared diagnostics sink.
    """
    print("LEXOR Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    diagnostics = Diagnostics(sys.stderr)
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            if line.strip() != "END SCRIPT":
                continue
            source = "\n".join(buffer) + "\n"
            buffer.clear()
            diagnostics.reset()
            run(source, diagnostics, Interpreter(diagnostics))
            print()
        except KeyboardInterrupt:
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
    if not args:
        run_repl()
        return 0
    if len(args) == 1 and args[0] in ('-h', '--help'):
        print_usage()
        return 0
    if len(args) == 1:
        return run_script(args[0])
    print_usage()
    return 1


def cli():
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    cli()
