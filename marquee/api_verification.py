"""
api_verification.py - Catalog API key verification for Marquee
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import MarqueeConfig
from .search.errors import CatalogError, ResponseError
from .search.tmdb_client import SERVICE_NAME, TmdbServiceAdapter

console = Console()


def _invalid_key_msg(detail: str) -> str:
    """Generate standardized invalid API key message"""
    return f"Invalid API key - {detail}"


async def verify_catalog_key(client: TmdbServiceAdapter) -> tuple[bool, str]:
    """Ask the catalog whether the configured credential is accepted"""
    try:
        data = await client.check_credential()
    except ResponseError as e:
        return False, _invalid_key_msg(f"{e.status} {e.reason}".strip())
    except CatalogError as e:
        return False, f"Connection failed: {e}"

    if isinstance(data, dict) and data.get("success") is True:
        return True, str(data.get("status_message") or "Credential accepted")
    return False, _invalid_key_msg("unexpected authentication response")


async def verify_api_key(config: MarqueeConfig) -> bool:
    """Verify the configured catalog API key and show the outcome"""
    console.print("[cyan][INFO][/cyan] Verifying API Key...")

    table = Table(title="API Key Verification Results")
    table.add_column("Service", style="cyan", no_wrap=True)
    table.add_column("Status", style="bold", no_wrap=True)
    table.add_column("Details", style="yellow")

    if not config.catalog.api_key:
        table.add_row("No Keys", "[yellow]⚠ Warning[/yellow]", "No API key configured")
        console.print(table)
        return False

    client = TmdbServiceAdapter(config.catalog)
    try:
        valid, details = await verify_catalog_key(client)
    finally:
        await client.close()

    status_str = "[green]✓ Valid[/green]" if valid else "[red]✗ Invalid[/red]"
    table.add_row(SERVICE_NAME, status_str, escape(details.strip()[:100]))
    console.print(table)
    return valid
