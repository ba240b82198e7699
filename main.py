from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from ideagen.factory import create_orchestrator
from ideagen.models.idea import GenerationRequest
from ideagen.orchestrator import all_ideas
from ideagen.services.credential_service import CredentialStore
from ideagen.services.export_service import export_to_csv
from ideagen.utils.constants import PROVIDER_IDS
from ideagen.utils.logger import set_log_level

app = typer.Typer()


@app.command()
def generate(
    industry: str = typer.Option(..., help="Industry the ideas should target"),
    target_market: str = typer.Option(..., help="Target market, e.g. 'small businesses'"),
    technologies: str = typer.Option(..., help="Preferred technology"),
    notes: str = typer.Option("", help="Additional requirements"),
    provider: Optional[List[str]] = typer.Option(None, help="Provider to ask, repeatable. Defaults to every configured provider"),
    csv: Optional[str] = typer.Option(None, help="Also export the ideas to this CSV file"),
    verbose: bool = typer.Option(False, "--verbose", help="Log adapter and parser activity at DEBUG"),
):
    """
    Ask the selected providers for SaaS ideas and print what came back.
    """
    if verbose:
        set_log_level("DEBUG")

    store = CredentialStore()
    provider_ids = list(provider) if provider else store.configured(PROVIDER_IDS)
    if not provider_ids:
        print("[bold red]No provider API keys configured. Use [bold green]set-key[/bold green] first.[/bold red]")
        raise typer.Exit(code=1)

    request = GenerationRequest(
        industry=industry,
        targetMarket=target_market,
        technologies=technologies,
        additionalNotes=notes,
    )
    results = create_orchestrator(credential_store=store).generate_all_sync(request, provider_ids)

    table = Table(title="SaaS Ideas")
    for column in ("Title", "Description", "Market Size", "Difficulty", "Source"):
        table.add_column(column)
    for idea in all_ideas(results):
        table.add_row(idea.title, idea.description, idea.marketSize.value, idea.difficulty.value, idea.source)
    print(table)

    for result in results:
        if not result.ok:
            print(f"[bold red]{result.source}:[/bold red] {result.error}")
        elif not result.ideas:
            print(f"[yellow]{result.source}: no ideas could be extracted from the reply[/yellow]")

    if csv:
        path = export_to_csv(all_ideas(results), csv)
        typer.echo(f"Exported ideas to {path}")


@app.command()
def set_key(provider_id: str, key: str):
    """Store the API key for a provider."""
    if provider_id not in PROVIDER_IDS:
        print(f"[bold red]Unknown provider {provider_id}. Choose one of: {', '.join(PROVIDER_IDS)}[/bold red]")
        raise typer.Exit(code=1)
    CredentialStore().set(provider_id, key)
    typer.echo(f"Saved API key for {provider_id}")


@app.command()
def remove_key(provider_id: str):
    """Forget the stored API key for a provider."""
    CredentialStore().remove(provider_id)
    typer.echo(f"Removed API key for {provider_id}")


@app.command()
def providers():
    """List supported providers and whether a key is configured."""
    store = CredentialStore()
    for provider_id in PROVIDER_IDS:
        status = "[green]configured[/green]" if store.get(provider_id) else "[red]missing key[/red]"
        print(f"{provider_id}: {status}")


if __name__ == "__main__":
    app()
