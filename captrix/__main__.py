"""captrix CLI - YouTube caption transcripts."""

import json
from pathlib import Path
from typing import Any, NoReturn

import fire
from rich.console import Console
from rich.table import Table

from captrix import __version__
from captrix.config import Config, get_config_path, load_config
from captrix.errors import CaptrixError, classify_error, display_error
from captrix.extractor import TranscriptExtractor
from captrix.fetch import build_fetcher
from captrix.logging import configure_logging, logger
from captrix.models import TranscriptRecord, demo_record
from captrix.routes import get_routes
from captrix.tracks import select_track

console = Console()
err_console = Console(stderr=True)

_SAMPLE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class CaptrixCLI:
    """Fetch YouTube caption transcripts through proxy routes.

    Examples:
        captrix transcript "https://youtu.be/dQw4w9WgXcQ"
        captrix transcript dQw4w9WgXcQ --output talk.md --markdown
        captrix --verbose tracks "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
        captrix --json-output transcript dQw4w9WgXcQ
        captrix --routes corsproxy transcript dQw4w9WgXcQ
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        routes: str | tuple[str, ...] | None = None,
    ) -> None:
        """Initialize CLI with options.

        Args:
            verbose: Enable debug logging
            json_output: Output results as JSON instead of human-readable text
            routes: Comma-separated route names to use, in order (default: all configured)
        """
        configure_logging(verbose)
        self._json = json_output
        self._route_names = _split_names(routes)
        logger.debug("captrix initialized with verbose={}, json={}, routes={}", verbose, json_output, routes)

    def _output(self, data: dict[str, Any]) -> dict[str, Any] | None:
        """Output result as JSON or print nothing (human output already printed)."""
        if self._json:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        return data if self._json else None

    def _config(self) -> Config:
        config = load_config()
        if self._route_names:
            config = config.select_routes(self._route_names)
        return config

    def _fail(self, exc: CaptrixError) -> NoReturn:
        """Report an extraction error and exit with status 1."""
        if self._json:
            info = classify_error(exc)
            self._output(
                {
                    "error": info.message,
                    "category": info.category.name,
                    "user_action": info.user_action,
                }
            )
        else:
            display_error(exc, err_console)
        raise SystemExit(1)

    def version(self) -> None:
        """Show captrix version."""
        if self._json:
            self._output({"version": __version__})
        else:
            console.print(f"captrix {__version__}")

    def config(self) -> dict[str, Any] | None:
        """Show configuration path and effective settings.

        Example:
            captrix config
        """
        config_path = get_config_path()
        config = self._config()

        if self._json:
            return self._output(
                {
                    "config_path": str(config_path),
                    "config_exists": config_path.exists(),
                    "timeout": config.timeout,
                    "user_agent": config.user_agent,
                    "routes": config.get_route_names(),
                }
            )

        console.print(f"[bold]Config path:[/bold] {config_path}")
        if config_path.exists():
            console.print("[green]Config file exists[/green]")
        else:
            console.print("[yellow]No config file, using defaults[/yellow]")
        console.print(f"[bold]Timeout:[/bold] {config.timeout}s")
        console.print(f"[bold]User-Agent:[/bold] {config.user_agent}")
        names = config.get_route_names()
        console.print(f"[bold]Routes:[/bold] {', '.join(names) if names else '[red]none[/red]'}")
        return None

    def routes(self) -> dict[str, Any] | None:
        """List configured routes in the order they are tried.

        Example:
            captrix routes
            captrix --json-output routes
        """
        route_list = get_routes(self._config())

        if self._json:
            return self._output(
                {
                    "routes": [
                        {"name": r.name, "encoding": r.encoding, "example": r.wrap(_SAMPLE_URL)}
                        for r in route_list
                    ]
                }
            )

        if not route_list:
            console.print("[yellow]No routes configured[/yellow]")
            return None

        table = Table(title="Routes", show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Encoding")
        table.add_column("Example", style="dim", overflow="fold")
        for i, r in enumerate(route_list, start=1):
            table.add_row(str(i), r.name, r.encoding, r.wrap(_SAMPLE_URL))
        console.print(table)
        return None

    def tracks(self, url_or_id: str) -> dict[str, Any] | None:
        """List the caption tracks available for a video.

        The track that would be used for the transcript is marked.

        Args:
            url_or_id: Video URL or ID

        Example:
            captrix tracks "https://youtu.be/dQw4w9WgXcQ"
        """
        url_or_id = str(url_or_id)  # fire parses all-digit IDs as int
        config = self._config()
        with build_fetcher(config) as fetcher:
            extractor = TranscriptExtractor(fetcher, get_routes(config))
            try:
                track_list = extractor.list_tracks(url_or_id)
            except CaptrixError as e:
                self._fail(e)

        chosen = select_track(track_list)

        if self._json:
            return self._output(
                {
                    "count": len(track_list),
                    "tracks": [{**t.to_dict(), "selected": t is chosen} for t in track_list],
                }
            )

        table = Table(title=f"Caption tracks ({len(track_list)})", show_header=True, header_style="bold")
        table.add_column("Language", style="cyan")
        table.add_column("Kind")
        table.add_column("Name")
        table.add_column("", style="green")
        for t in track_list:
            table.add_row(t.language_code, t.kind.value, t.name, "selected" if t is chosen else "")
        console.print(table)
        return None

    def transcript(
        self, url_or_id: str, output: str | None = None, markdown: bool = False
    ) -> dict[str, Any] | None:
        """Extract a video's caption transcript.

        Each line is "[MM:SS] text". Routes are tried in order until one works.

        Args:
            url_or_id: Video URL or ID
            output: Write to this file instead of stdout
            markdown: Write markdown with YAML frontmatter (source, date, word count)

        Example:
            captrix transcript "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
            captrix transcript dQw4w9WgXcQ --output talk.md --markdown
        """
        url_or_id = str(url_or_id)
        config = self._config()
        with build_fetcher(config) as fetcher:
            extractor = TranscriptExtractor(fetcher, get_routes(config))
            try:
                result = extractor.extract(url_or_id)
            except CaptrixError as e:
                self._fail(e)

        record = TranscriptRecord(
            video_id=result.video_id,
            source=url_or_id,
            content=result.transcript,
            route=result.route,
            language=result.track.language_code,
        )
        return self._emit(record, output, markdown)

    def demo(self, url_or_id: str = "", output: str | None = None, markdown: bool = False) -> dict[str, Any] | None:
        """Show a sample transcript, for when real extraction is blocked.

        Args:
            url_or_id: Original input to record as the source
            output: Write to this file instead of stdout
            markdown: Write markdown with YAML frontmatter

        Example:
            captrix demo
        """
        return self._emit(demo_record(str(url_or_id)), output, markdown)

    def _emit(self, record: TranscriptRecord, output: str | None, markdown: bool) -> dict[str, Any] | None:
        text = record.to_markdown() if markdown else record.content + "\n"

        if output:
            out_path = Path(output)
            out_path.write_text(text, encoding="utf-8")
            logger.info("Saved {} words to {}", record.word_count, out_path)
            if self._json:
                return self._output({**record.to_dict(), "output": str(out_path)})
            console.print(f"[green]Saved to: {out_path}[/green]")
            return None

        if self._json:
            return self._output(record.to_dict())

        # Plain print so bracketed timestamps are not read as rich markup
        print(text, end="")
        return None


def _split_names(names: str | tuple[str, ...] | list[str] | None) -> list[str]:
    """Route names from "a,b" or a tuple/list (Fire parses a,b as a tuple)."""
    if not names:
        return []
    if isinstance(names, str):
        return [n.strip() for n in names.split(",") if n.strip()]
    return [str(n).strip() for n in names if str(n).strip()]


def main() -> None:
    """CLI entry point."""
    fire.Fire(CaptrixCLI)


if __name__ == "__main__":
    main()
