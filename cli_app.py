#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
VectorSpaceSearch - Interactive CLI Interface
A command console for the VectorSpaceSearch engine
"""

import os
import sys
import time
import argparse
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich import box
from rich.markup import escape
from rich.text import Text

# Add the project root directory to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from VectorSpaceSearch.config import load_config
from VectorSpaceSearch.log_setup import setup_logging
from VectorSpaceSearch.main import VectorSpaceSearch
from VectorSpaceSearch.vector_search import SearchResults


class VectorSpaceSearchCLI:
    def __init__(self, retriever: VectorSpaceSearch, console: Optional[Console] = None):
        """Initialize the CLI interface"""
        self.retriever = retriever
        self.console = console or Console()

    def print_header(self):
        """Display the application header"""
        self.console.print(Panel(
            "[bold blue]VectorSpaceSearch[/bold blue] [yellow]Search Engine[/yellow]",
            border_style="blue",
            subtitle="Commands: query <text> | type <n> | results | exit",
            width=80
        ))

    def initialize(self, documents_path: str, stop_words_path: Optional[str] = None,
                   use_stop_words: bool = True) -> bool:
        """Load documents and stop words, then build the index"""
        self.console.print(f"Loading documents from: [cyan]{escape(documents_path)}[/cyan]")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True
        ) as progress:
            task = progress.add_task("Loading documents...", total=None)
            if not self.retriever.load_documents(documents_path):
                self.console.print("[bold red]Could not load documents.[/bold red]")
                return False

            if stop_words_path or use_stop_words:
                progress.update(task, description="Loading stop words...")
                if not self.retriever.load_stop_words(stop_words_path):
                    self.console.print("[bold red]Could not load stop words.[/bold red]")
                    return False

            progress.update(task, description="Building index...")
            if not self.retriever.init_index():
                self.console.print("[bold red]Could not build the index.[/bold red]")
                return False

        self.console.print(f"The size of the dictionary is: [bold]{self.retriever.vocabulary_size()}[/bold]")
        return True

    def execute(self, command: str) -> bool:
        """
        Execute one console command.

        Returns:
            False when the console should exit, True otherwise
        """
        stripped = command.strip()
        lowered = stripped.lower()

        if lowered.startswith("query"):
            self.produce_query(stripped[len("query"):].strip())
        elif lowered.startswith("type"):
            self.produce_type(stripped[len("type"):].strip())
        elif lowered == "results":
            self.display_results(self.retriever.results())
        elif lowered.startswith("exit"):
            return False
        else:
            self.console.print("[bold red]Invalid command.[/bold red]")
        return True

    def produce_query(self, query: str):
        """Run a query and show the best results"""
        start_time = time.time()
        results = self.retriever.search(query)
        execution_time = time.time() - start_time

        if results.no_results:
            self.console.print("[yellow]No results.[/yellow]")
            return

        self.console.print(f"Query is: [cyan]{escape('[' + ', '.join(results.query_terms) + ']')}[/cyan].")
        self.console.print(f"[green]Found {len(results)} documents in {execution_time:.6f} seconds[/green]")
        self.display_results(results)

    def produce_type(self, argument: str):
        """Print the full text of a document from the last results"""
        try:
            rank = int(argument)
        except ValueError:
            self.console.print("[bold red]Invalid input.[/bold red]")
            return

        try:
            document = self.retriever.get_result_document(rank)
        except IndexError:
            self.console.print("[bold red]Invalid index.[/bold red]")
            return
        except LookupError:
            self.console.print("[yellow]No results.[/yellow]")
            return

        self.console.print(Panel(Text(document.text), title=escape(str(document.id)), border_style="cyan"))

    def display_results(self, results: SearchResults):
        """Display search results in a formatted way"""
        if results.no_results:
            self.console.print("[yellow]No results.[/yellow]")
            return

        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title=f"[bold]Best {len(results)} document(s) ranked by relevance[/bold]",
            title_style="yellow"
        )
        table.add_column("Rank", style="dim", width=6)
        table.add_column("Score", style="yellow", width=10)
        table.add_column("Document", style="cyan", no_wrap=False)

        for result in results:
            score_str = f"{result.similarity:.4f}"
            if result.similarity > 0.7:
                score_display = f"[bold green]{score_str}[/bold green]"
            elif result.similarity > 0.4:
                score_display = f"[yellow]{score_str}[/yellow]"
            else:
                score_display = f"[dim]{score_str}[/dim]"

            table.add_row(escape(f"[{result.rank}]"), score_display, escape(str(result.identifier)))

        self.console.print(table)

    def interactive_mode(self):
        """Run the command loop until exit"""
        while True:
            try:
                command = self.console.input("\n[bold cyan]Enter command >[/bold cyan] ")
            except EOFError:
                break
            if not self.execute(command):
                break


def main():
    """Main entry point for the CLI application"""
    parser = argparse.ArgumentParser(
        description='VectorSpaceSearch - Interactive vector-space search console'
    )
    parser.add_argument('documents', help='Directory of text documents or a documents JSON file')
    parser.add_argument('--stop-words', help='Stop words file (one word per line or JSON list)')
    parser.add_argument('--no-stop-words', action='store_true', help='Disable stop words removal')
    parser.add_argument('--config', help='Path to a config JSON file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging("DEBUG" if args.debug else config["logging"]["level"])

    cli = VectorSpaceSearchCLI(VectorSpaceSearch(config))
    cli.print_header()

    use_stop_words = config["preprocessing"]["stop_words"]["use"] and not args.no_stop_words
    if not cli.initialize(args.documents, args.stop_words, use_stop_words):
        sys.exit(1)

    cli.interactive_mode()


if __name__ == "__main__":
    main()
