#!/usr/bin/env python3
"""
cli.py - Entry point for MARQUEE - search a movie catalog from the terminal
"""

try:
    import asyncio
    import sys
    import argparse
    import time
    from pathlib import Path
    from rich.console import Console
    from rich.panel import Panel
    from rich.prompt import Prompt
    from rich.table import Table
    from typing import Optional
    import marquee as pkg
    from . import logger
    from .config import MarqueeConfig, load_config, resolve_config_path
    from .api_verification import verify_api_key
    from .search.controller import SearchController
    from .search.protocols import CatalogClient
    from .search.results_view import ResultsView
    from .search.state_machine import InputChanged, SearchState, SearchStatus
    from .search.store import SearchStore
    from .search.tmdb_client import TmdbServiceAdapter
except ImportError as e:
    print(f"Error: Missing required dependency: {e}")
    print("Please install required dependencies: pip install -e .")
    sys.exit(1)

console = Console()
_CLI_SESSION_START_MONOTONIC = time.monotonic()
QUERY_LABEL = "Movie Name"
QUERY_PLACEHOLDER = "i.e Marvel Endgame"
QUIT_WORDS = {"q", "quit", "exit"}


def _ui_info(message: str) -> None:
    console.print(f"[cyan][INFO][/cyan] {message}")


def _ui_warn(message: str) -> None:
    console.print(f"[yellow][WARNING][/yellow] {message}")


def _ui_error(message: str) -> None:
    console.print(f"[red][ERROR][/red] {message}")


def _reset_cli_session_timer() -> None:
    global _CLI_SESSION_START_MONOTONIC
    _CLI_SESSION_START_MONOTONIC = time.monotonic()


def _format_elapsed_runtime(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.1f}s"
    if seconds < 3_600:
        return f"{seconds / 60:.1f}m"
    if seconds < 86_400:
        return f"{seconds / 3_600:.1f}h"
    return f"{seconds / 86_400:.1f}d"


def _ui_goodbye_with_elapsed() -> None:
    elapsed = max(0.0, time.monotonic() - _CLI_SESSION_START_MONOTONIC)
    _ui_info(f"Goodbye! Elapsed {_format_elapsed_runtime(elapsed)}")


def redact_api_key(key: str) -> str:
    """Redact API key showing first 2 and last 2 characters"""
    if not key:
        return ""
    if len(key) <= 4:
        return "****"
    return f"{key[:2]}....{key[-2:]}"


def display_config_table(config: MarqueeConfig):
    """Display current catalog configuration status"""
    _ui_info(f"✓ Read configuration file \"{config.config_path}\"... ok!")

    catalog = config.catalog
    table = Table(title="Catalog configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    key_status = f"✓ Configured = {redact_api_key(catalog.api_key)}" if catalog.api_key else "✗ Not set"
    table.add_row("API key", key_status)
    table.add_row("API URL", catalog.api_url)
    table.add_row("Image base URL", catalog.image_base_url)
    table.add_row("Timeout", f"{catalog.timeout:g}s")
    console.print(table)
    console.print()


class SearchSession:
    """One interactive session: state store, results view and search controller."""

    def __init__(
        self,
        config: MarqueeConfig,
        client: CatalogClient | None = None,
        *,
        discard_stale: bool = False,
        view_console: Console | None = None,
    ) -> None:
        self.store = SearchStore()
        self.view = ResultsView(view_console or logger.get_logger().console, config.catalog.image_base_url)
        self._unsubscribe = self.store.subscribe(self.view)
        self.client = client if client is not None else TmdbServiceAdapter(config.catalog)
        self.controller = SearchController(
            self.store.dispatch,
            self.client.fetch_results,
            discard_stale=discard_stale,
        )

    @property
    def state(self) -> SearchState:
        return self.store.state

    def change_input(self, text: str) -> None:
        self.store.dispatch(InputChanged(text))

    async def submit(self) -> SearchState:
        await self.controller.search(self.store.state.query)
        return self.store.state

    async def close(self) -> None:
        self.view.close()
        self._unsubscribe()
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()


def _read_query() -> str | None:
    text = Prompt.ask(f"{QUERY_LABEL} [grey50]({QUERY_PLACEHOLDER}, q to quit)[/grey50]", default="")
    if not text.strip() or text.strip().lower() in QUIT_WORDS:
        return None
    return text


async def run_interactive(config: MarqueeConfig, session: SearchSession | None = None) -> None:
    session = session or SearchSession(config)
    try:
        while True:
            text = await asyncio.to_thread(_read_query)
            if text is None:
                return
            session.change_input(text)
            await session.submit()
            console.print()
    finally:
        await session.close()


async def run_one_shot(config: MarqueeConfig, query: str, session: SearchSession | None = None) -> SearchState:
    session = session or SearchSession(config)
    try:
        session.change_input(query)
        return await session.submit()
    finally:
        await session.close()


def _render_banner() -> None:
    console.print(Panel("[bold blue]MARQUEE - Movie search[/bold blue]\nFind movies in the catalog by title"))
    console.print()


def show_help(parser: argparse.ArgumentParser) -> None:
    print(f"MARQUEE v{getattr(pkg, '__version__', '0.0.0')} - Search a movie catalog")
    print()
    parser.print_help()


def main():
    """Entry point"""
    _reset_cli_session_timer()
    parser = argparse.ArgumentParser(add_help=False)
    for args, kwargs in (
        (("-h", "--help"), {"action": "store_true", "help": "Show help"}),
        (("--verify",), {"action": "store_true", "help": "Verify API key and exit"}),
        (("-c", "--config"), {"metavar": "PATH", "help": "Path to config.toml (file or directory)"}),
        (("-o", "--output"), {"metavar": "DIR", "help": "Mirror session output to DIR/runN.txt"}),
        (("-d", "--debug"), {"action": "store_true", "help": "Debug mode with API calls, JSON responses, timestamps"}),
    ):
        parser.add_argument(*args, **kwargs)
    parser.add_argument('query', nargs='?', help='Movie title to search once and exit')

    run_logger: Optional[logger.MarqueeLogger] = None
    try:
        args = parser.parse_args()
        if args.help:
            show_help(parser)
            sys.exit(0)

        config = load_config(resolve_config_path(args.config))
        log_path = logger.next_run_path(Path(args.output).expanduser()) if args.output else None
        run_logger = logger.MarqueeLogger(log_path, debug=args.debug)
        logger.set_logger(run_logger)

        if args.verify:
            result = asyncio.run(verify_api_key(config))
            sys.exit(0 if result else 1)

        if not config.catalog.api_key:
            _ui_error("No catalog API key configured. Set [catalog] api_key in config.toml or MARQUEE_API_KEY.")
            sys.exit(1)

        if args.query:
            final_state = asyncio.run(run_one_shot(config, args.query))
            sys.exit(1 if final_state.status is SearchStatus.ERRORED else 0)

        _render_banner()
        display_config_table(config)
        asyncio.run(run_interactive(config))
        _ui_goodbye_with_elapsed()
        sys.exit(0)
    except KeyboardInterrupt:
        _ui_goodbye_with_elapsed()
        sys.exit(0)
    except Exception as e:
        _ui_error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        if run_logger is not None:
            run_logger.close()


if __name__ == "__main__":
    main()
