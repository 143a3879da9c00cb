import asyncio
from collections.abc import Awaitable

import typer
import uvicorn

from featurefest.board import FeatureBoard, filter_by_status
from featurefest.client import FeaturefestClient
from featurefest.config import configure_logging, settings
from featurefest.errors import FeaturefestError
from featurefest.schemas import Feature, FeatureStatus

app = typer.Typer(help="Featurefest - feature requests and upvotes from the terminal")

BoardIdOption = typer.Option(None, "--board-id", help="Board id (defaults to FEATUREFEST_BOARD_ID)")
BaseUrlOption = typer.Option(None, "--base-url", help="REST base URL")
UserIdOption = typer.Option(None, "--user-id", help="Voter / creator id")


def _run(work: Awaitable) -> None:
    configure_logging()
    try:
        asyncio.run(work)
    except FeaturefestError as exc:
        typer.echo(f"Error: {exc}", err=True)
        typer.echo(exc.recovery_suggestion, err=True)
        raise typer.Exit(code=1) from exc


def _format_feature(feature: Feature, voted: bool = False) -> str:
    marker = "▲" if voted else "△"
    return (
        f"{marker} {feature.total_votes:>4}  {feature.title}"
        f"  [{feature.status.display_name}]  ({feature.id})"
    )


@app.command()
def features(
    status: FeatureStatus | None = typer.Option(None, "--status", help="Only show this status"),
    board_id: str | None = BoardIdOption,
    base_url: str | None = BaseUrlOption,
) -> None:
    """List the board's feature requests, most voted first."""

    async def _list() -> None:
        async with FeaturefestClient(api_key=board_id, base_url=base_url) as client:
            items = await client.get_features()
        if status is not None:
            items = filter_by_status(items, status)
        if not items:
            typer.echo("No features.")
        for feature in items:
            typer.echo(_format_feature(feature))

    _run(_list())


@app.command()
def board(
    status: FeatureStatus = typer.Option(FeatureStatus.IDEAS, "--status", help="Tab to show"),
    user_id: str | None = UserIdOption,
    board_id: str | None = BoardIdOption,
    base_url: str | None = BaseUrlOption,
) -> None:
    """Show one status tab of the board, marking features you have upvoted."""

    async def _show() -> None:
        async with FeaturefestClient(api_key=board_id, base_url=base_url) as client:
            view = FeatureBoard(client, user_id=user_id, selected_status=status)
            await view.load()

        if view.error_message:
            typer.echo(view.error_message, err=True)
            typer.echo(FeaturefestError.recovery_suggestion, err=True)
            raise typer.Exit(code=1)

        shown = view.filtered_features
        if not shown:
            title, message = view.empty_state
            typer.echo(title)
            typer.echo(message)
            return
        for feature in shown:
            typer.echo(_format_feature(feature, voted=view.has_voted(feature)))

    _run(_show())


@app.command()
def create(
    title: str,
    description: str,
    user_id: str | None = UserIdOption,
    status: FeatureStatus = typer.Option(FeatureStatus.IDEAS, "--status"),
    board_id: str | None = BoardIdOption,
    base_url: str | None = BaseUrlOption,
) -> None:
    """Submit a new feature request."""

    async def _create() -> None:
        async with FeaturefestClient(api_key=board_id, base_url=base_url) as client:
            feature = await client.create_feature(
                title, description, user_id=user_id, status=status
            )
        typer.echo(f"Created {feature.id}: {feature.title}")

    _run(_create())


@app.command()
def upvote(
    feature_id: str,
    user_id: str | None = UserIdOption,
    board_id: str | None = BoardIdOption,
    base_url: str | None = BaseUrlOption,
) -> None:
    """Toggle your upvote on a feature."""

    async def _toggle() -> None:
        async with FeaturefestClient(api_key=board_id, base_url=base_url) as client:
            result = await client.upvote(feature_id, user_id=user_id)
        if result.voted:
            typer.echo(f"Upvoted {feature_id}")
        else:
            typer.echo(f"Removed vote from {feature_id}")

    _run(_toggle())


@app.command()
def validate(
    board_id: str | None = BoardIdOption,
    base_url: str | None = BaseUrlOption,
) -> None:
    """Check that the board id resolves to a board."""

    async def _validate() -> None:
        async with FeaturefestClient(api_key=board_id, base_url=base_url) as client:
            found = await client.validate_api_key()
        typer.echo(f"Board OK: {found.name} ({found.id})")

    _run(_validate())


@app.command()
def serve(
    host: str = typer.Option(settings.host, "--host"),
    port: int = typer.Option(settings.port, "--port"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    """Run the local stub backend."""
    configure_logging()
    typer.echo(f"Starting Featurefest stub on http://{host}:{port}/rest/v1 ...")
    uvicorn.run(
        "featurefest.stub.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
