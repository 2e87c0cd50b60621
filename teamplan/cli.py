"""CLI entrypoint (Typer).

- `teamplan plan "<requirements>" -e Alice -e Bob` generates a plan against
  the configured model server and prints it
- `teamplan serve` runs the API
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import typer

from teamplan.config import get_settings
from teamplan.errors import TeamplanError
from teamplan.llm.ollama import OllamaAdapter, OllamaConfig
from teamplan.planner.pipeline import generate_project_plan
from teamplan.schemas import PlanRequest, ProjectPlan

app = typer.Typer(help="Teamplan CLI.")


async def _plan(request: PlanRequest, config: OllamaConfig, model: str | None) -> ProjectPlan:
    client = OllamaAdapter(config)
    try:
        return await generate_project_plan(request, client, model=model)
    finally:
        await client.close()


@app.command()
def plan(
    requirements: str,
    employees: List[str] = typer.Option([], "--employee", "-e", help="Team member name, repeatable"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Override the configured model"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the model server URL"),
    markdown: bool = typer.Option(False, "--markdown", help="Print markdown instead of JSON"),
):
    """Generate a project plan from requirements."""
    logging.basicConfig(level=logging.WARNING)

    config = OllamaConfig.from_settings()
    if base_url:
        config = config.model_copy(update={"base_url": base_url})

    request = PlanRequest(requirements=requirements, employees=employees)
    try:
        result = asyncio.run(_plan(request, config, model))
    except TeamplanError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if markdown:
        typer.echo(result.to_markdown())
    else:
        typer.echo(result.model_dump_json(indent=2))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
):
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "teamplan.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    app()
