"""Command-line front end for the idea form.

    python -m innovaite.client --domain fitness --audience students \\
        --difficulty beginner --days 3 --mode hackathon
"""

import asyncio
import logging
from enum import Enum
from typing import Optional

import typer
from dotenv import load_dotenv

from ..constants import DIFFICULTIES, PROJECT_MODES
from .controller import IdeaGeneratorController
from .render import render_view

Difficulty = Enum("Difficulty", {value: value for value in DIFFICULTIES}, type=str)
Mode = Enum("Mode", {value: value for value in PROJECT_MODES}, type=str)

app = typer.Typer(add_completion=False)


class EchoNotifier:
    def success(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.GREEN, err=True)

    def error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, err=True)


@app.command()
def generate(
    domain: str = typer.Option(..., help="Problem domain, e.g. fitness"),
    audience: str = typer.Option(..., help="Target audience, e.g. students"),
    difficulty: Difficulty = typer.Option(..., help="Difficulty level"),
    days: int = typer.Option(..., min=1, help="Time available in days"),
    mode: Mode = typer.Option(..., help="Project mode"),
    skills: Optional[str] = typer.Option(None, help="Skills available on the team"),
    constraints: Optional[str] = typer.Option(None, help="Constraints to respect"),
    api_url: Optional[str] = typer.Option(None, envvar="INNOVAITE_API_URL", help="Gateway base URL"),
):
    """
    Generate three project ideas and print them as cards.
    """
    form_data = {
        "domain": domain,
        "audience": audience,
        "difficulty": difficulty.value,
        "time_available_days": days,
        "mode": mode.value,
    }
    if skills:
        form_data["skills"] = skills
    if constraints:
        form_data["constraints"] = constraints

    controller = IdeaGeneratorController(base_url=api_url, notifier=EchoNotifier())
    ok = asyncio.run(controller.generate(form_data))

    typer.echo(render_view(controller))
    if not ok:
        raise typer.Exit(code=1)


def main():
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s | %(name)s | %(message)s")
    app()


if __name__ == "__main__":
    main()
