"""CLI for the calculator engine.

Usage:
    python -m src eval "5+3*2"                  # Evaluate an expression
    python -m src eval "6/02" --semantic        # Semantic zero-division check
    python -m src keys 5 0 % Enter              # Replay key presses
    python -m src keys 4 √ --json               # Final state as JSON contract
    python -m src repl                          # Interactive session
"""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.table import Table

from src.core.contracts import validate_engine_state
from src.core.domain import CalculatorError, EngineState
from src.engine import CalculatorEngine, EngineConfig, Evaluator, ZeroDivisionCheck

app = typer.Typer(
    name="calc",
    help="Keystroke-level calculator engine",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# Команды repl, которые не являются клавишами
_REPL_WORDS = {
    "sqrt": "√",
    "clear": "Escape",
    "del": "Backspace",
}


def _config(semantic: bool, fraction_digits: int) -> EngineConfig:
    check = ZeroDivisionCheck.SEMANTIC if semantic else ZeroDivisionCheck.TEXTUAL
    return EngineConfig(fraction_digits=fraction_digits, zero_division_check=check)


def _render_state(state: EngineState) -> str:
    line = f"[bold]{state.display_text}[/bold]"
    if state.previous_expression:
        line = f"[dim]{state.previous_expression}[/dim]  {line}"
    if state.pending_error:
        line += f"  [red]{state.pending_error.message}[/red]"
    return line


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '5+3*2' or '50%'"),
    semantic: bool = typer.Option(False, "--semantic", help="Detect division by zero semantically"),
    fraction_digits: int = typer.Option(8, "--fraction-digits", help="Max digits after the decimal point"),
) -> None:
    """Evaluate an expression directly (no keystroke validation)."""
    config = _config(semantic, fraction_digits)
    evaluator = Evaluator(
        zero_division_check=config.zero_division_check,
        fraction_digits=config.fraction_digits,
    )
    try:
        result = evaluator.evaluate(expression)
    except CalculatorError as e:
        err_console.print(f"[red]{e.kind.message}[/red]")
        raise typer.Exit(1)
    console.print(result)


@app.command("keys")
def cmd_keys(
    keys: list[str] = typer.Argument(help="Key presses: digits, operators, Enter, Backspace, Escape, √"),
    semantic: bool = typer.Option(False, "--semantic", help="Detect division by zero semantically"),
    as_json: bool = typer.Option(False, "--json", help="Print the final state as a JSON contract"),
) -> None:
    """Replay a sequence of key presses through the engine."""
    with CalculatorEngine(_config(semantic, 8)) as engine:
        table = Table(title="Key replay", show_header=True, header_style="bold")
        table.add_column("Key", style="green")
        table.add_column("Display", justify="right")
        table.add_column("Previous", style="dim", justify="right")
        table.add_column("Error", style="red")

        state = engine.state
        for key in keys:
            # √ не является физической клавишей, это кнопка
            state = engine.append_token(key) if key == "√" else engine.press_key(key)
            table.add_row(
                key,
                state.display_text,
                state.previous_expression or "",
                state.pending_error.message if state.pending_error else "",
            )

    if as_json:
        payload = state.to_contract()
        validate_engine_state(payload)
        console.print_json(json.dumps(payload))
        return

    console.print()
    console.print(table)
    console.print()


@app.command("repl")
def cmd_repl(
    semantic: bool = typer.Option(False, "--semantic", help="Detect division by zero semantically"),
) -> None:
    """Interactive session: type keys, 'sqrt', 'del', 'clear', or 'quit'."""
    with CalculatorEngine(_config(semantic, 8)) as engine:
        console.print(_render_state(engine.state))
        while True:
            try:
                line = console.input("[green]> [/green]").strip()
            except (EOFError, KeyboardInterrupt):
                break

            if line in ("quit", "exit"):
                break

            if line in _REPL_WORDS:
                key = _REPL_WORDS[line]
                state = engine.append_token(key) if key == "√" else engine.press_key(key)
            elif line == "":
                state = engine.press_key("Enter")
            else:
                for ch in line.replace(" ", ""):
                    state = engine.append_token(ch) if ch == "√" else engine.press_key(ch)

            console.print(_render_state(state))


if __name__ == "__main__":
    app()
