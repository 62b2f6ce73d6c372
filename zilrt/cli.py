"""ZIL Runtime command line interface."""

import json
import logging
import sys
from pathlib import Path

import click

from zilrt import library
from zilrt.resolver import WordResolver
from zilrt.runtime.interpreter import Game, GameConfig
from zilrt.runtime.output import BufferSink, ConsoleInput, EchoSink, ScriptedInput
from zilrt.runtime.signals import AuthoringError, WorldFileError
from zilrt.world import load_world


@click.group()
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
              help="Logging level")
def main(log_level):
    """ZIL Runtime - interactive fiction engine."""
    logging.basicConfig(level=getattr(logging, log_level.upper()),
                        format="%(levelname)s %(name)s: %(message)s")


@main.command("play")
@click.argument("world", type=click.Path(exists=True, dir_okay=False))
@click.option("--script", "-s", type=click.Path(exists=True, dir_okay=False),
              help="Read commands from a file instead of the terminal")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--strict", is_flag=True, help="Treat authoring errors as fatal")
@click.option("--max-moves", type=int, default=None, help="Stop after this many moves")
@click.option("--json-output", "-j", "json_output", is_flag=True, help="Output the result as JSON")
def play_command(world, script, seed, strict, max_moves, json_output):
    """Play a world file."""
    try:
        spec = load_world(world)
    except WorldFileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    config = GameConfig(seed=seed, strict=strict, max_moves=max_moves)
    sink = BufferSink() if json_output else EchoSink()
    game = Game(config, sink=sink)
    library.install(game)

    try:
        start = spec.install(game)
    except WorldFileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if script:
        lines = Path(script).read_text(encoding="utf-8").splitlines()
        reader = ScriptedInput(lines, echo=sink)
    else:
        reader = ConsoleInput()

    try:
        result = game.run(reader, WordResolver(game), start=start)
    except AuthoringError as e:
        click.echo(f"Authoring error: {e}", err=True)
        sys.exit(1)

    if json_output:
        output = result.to_dict()
        output["title"] = spec.title
        output["transcript"] = sink.getvalue()
        click.echo(json.dumps(output, indent=2))
    else:
        click.echo(f"\n[{spec.title}: {result.reason}, score {result.score}, {result.moves} moves]")


@main.command("inspect")
@click.argument("world", type=click.Path(exists=True, dir_okay=False))
@click.option("--json-output", "-j", "json_output", is_flag=True, help="Output as JSON")
def inspect_command(world, json_output):
    """Show a world file's object tree."""
    try:
        spec = load_world(world)
        game = Game()
        spec.install(game)
    except WorldFileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(game.objects.to_dict(), indent=2, default=str))
        return

    click.echo(f"World: {spec.title}")
    if spec.start:
        click.echo(f"  Start: {spec.start}")

    def show(obj_id, depth):
        record = game.get(obj_id)
        flags = f" [{', '.join(sorted(record.flags))}]" if record.flags else ""
        click.echo(f"{'  ' * depth}- {obj_id} ({record.name}){flags}")
        for child in game.children(obj_id):
            show(child, depth + 1)

    for root in game.children(None):
        show(root, 1)


if __name__ == "__main__":
    main()
