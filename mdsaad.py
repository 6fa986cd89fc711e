#!/usr/bin/env python3
"""
mdsaad - ASCII art display system for the terminal
Browse, search and render categorized ASCII art with colors and animations.
"""

import argparse
import platform
import shlex
import signal
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

import mdsaad_art
from art_catalog import ArtCatalog, ArtEntry, FileSystemStorage, SearchResult, METADATA_TTL_MS
from colors import COLOR_SCHEMES, RICH_STYLES
from completion import SHOW_KEYWORDS, generate_completion, shell_words, SUPPORTED_SHELLS
from config_manager import MDSAAD_VERSION, ConfigurationManager, coerce_value, get_config_manager
from errors import MdsaadError, NotInitializedError, CatalogLoadError
from logger import get_logger, log_session, setup_logging
from metadata_cache import MetadataCache
from render_engine import (ANIMATION_DESCRIPTIONS, AnimationMode, DisplayConfig,
                           RenderEngine, adjust_width, resolve_animation)
from terminal import TerminalSink

log = get_logger("cli")

KEYWORD_ALIASES = {
    "?": "help",
    "cats": "categories",
    "statistics": "stats",
}

PROMPT_STYLE = Style.from_dict({
    "prompt": "ansicyan bold",
    "arrow": "ansigreen",
})


def print_with_rich(console: Console, text: str, style: str = "default"):
    """Print a message with one of the named styles."""
    styles = {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold yellow",
        "accent": "cyan",
        "muted": "bright_black",
    }
    console.print(Text(text, style=styles.get(style, "")))


class ShowCommand:
    """The ``show`` command: keywords, search and art display."""

    def __init__(self, catalog: ArtCatalog, engine: RenderEngine, console: Console,
                 settings: Optional[Dict[str, Any]] = None):
        self.catalog = catalog
        self.engine = engine
        self.console = console
        self.settings = settings or {}

    def say(self, text: str, style: str = "default"):
        print_with_rich(self.console, text, style)

    def _option(self, options: Dict[str, Any], key: str, setting: str, default: Any) -> Any:
        value = options.get(key)
        if value is None:
            value = self.settings.get(setting, default)
        return value

    def execute(self, art_name: Optional[str], options: Dict[str, Any]) -> int:
        """Run the command and return a process exit status."""
        try:
            if not self.catalog.is_initialized():
                self.say("🎨 Initializing ASCII art database...", "warning")
                self.catalog.initialize()

            keyword = (art_name or "help").lower()
            keyword = KEYWORD_ALIASES.get(keyword, keyword)
            if keyword in SHOW_KEYWORDS:
                return self.handle_keyword(keyword, options)

            return self.display_art(art_name, options)
        except MdsaadError as e:
            return self.handle_error(e)

    def handle_keyword(self, keyword: str, options: Dict[str, Any]) -> int:
        if keyword == "help":
            self.show_help()
        elif keyword == "list":
            return self.list_art(options.get("category"))
        elif keyword == "categories":
            self.show_categories()
        elif keyword == "search":
            query = options.get("query")
            if not query:
                self.say('❌ Please specify search query: --query "search term"', "error")
                return 1
            return self.search_art(query, options)
        elif keyword == "random":
            return self.show_random_art(options)
        elif keyword == "popular":
            return self.show_popular_art(options)
        elif keyword == "stats":
            self.show_statistics()
        elif keyword == "colors":
            self.show_color_schemes()
        elif keyword == "animations":
            self.show_animations()
        elif keyword == "refresh":
            self.catalog.refresh()
            self.say(f"🔄 Reloaded {self.catalog.total_count()} artworks", "success")
        return 0

    # Display

    def build_display_config(self, options: Dict[str, Any]) -> DisplayConfig:
        """Translate command options and config defaults into a DisplayConfig."""
        animated = bool(options.get("animated")) or bool(self.settings.get("animated", False))
        animation = self._option(options, "animation", "animation", "typewriter")
        mode = resolve_animation(animation) if animated else AnimationMode.STATIC
        speed = int(self._option(options, "speed", "speed", 100))
        color = self._option(options, "color", "default_color", "white")
        scheme = self._option(options, "color_scheme", "color_scheme", "default")

        params: Dict[str, Any] = {}
        if mode == AnimationMode.FADE_IN:
            speed *= 2
        elif mode == AnimationMode.SLIDE_IN:
            params["direction"] = self._option(options, "direction", "slide_direction", "right")
        elif mode == AnimationMode.MATRIX:
            params["duration_ms"] = 3000
            color, scheme = "green", None
        elif mode == AnimationMode.PULSE:
            speed *= 3
            params["cycles"] = 3
        elif mode == AnimationMode.WAVE:
            params["cycles"] = 2

        return DisplayConfig.build(color=color, color_scheme=scheme, animation=mode,
                                   speed=speed, **params)

    def display_art(self, art_name: str, options: Dict[str, Any]) -> int:
        results = self.catalog.search_art(art_name, category=options.get("category"),
                                          limit=1, fuzzy=True)
        if not results:
            self.say(f'❌ ASCII art "{art_name}" not found', "error")
            self.say('Use "mdsaad show list" to see available art', "muted")
            self.say('Use "mdsaad show search --query <term>" to search', "muted")
            return 1

        return self.render_result(results[0], options)

    def render_result(self, result: SearchResult, options: Dict[str, Any]) -> int:
        art = result.art
        self.console.print(Text.assemble(("🎨 Displaying: ", "cyan"), (art.name, "white"),
                                         (f" ({art.category})", "cyan")))
        if result.description:
            self.say(f"📝 {result.description}", "muted")
        self.console.print()

        content = art.content
        width = options.get("width")
        if width:
            content = adjust_width(content, int(width))

        config = self.build_display_config(options)
        log_session(f"show {art.category}/{art.name} ({config.animation.value})")
        try:
            completed = self.engine.render(content, config, preempt=True)
        except KeyboardInterrupt:
            self.engine.stop_animation()
            completed = False
        if not completed:
            self.say("⚠️  Animation stopped", "warning")

        self.console.print()
        self.show_art_metadata(art, result)
        return 0

    def show_art_metadata(self, art: ArtEntry, result: SearchResult):
        self.say("─" * 60, "muted")
        self.say(f"📏 Size: {art.line_count} lines × {art.max_width} chars ({art.byte_size} total)", "muted")
        if result.tags:
            self.say(f"🏷️  Tags: {', '.join(result.tags)}", "muted")
        if result.difficulty:
            self.say(f"⭐ Complexity: {result.difficulty}/10", "muted")
        self.say(f"📁 Category: {art.category}", "muted")

    # Listings

    def _print_entries(self, entries: List[ArtEntry]):
        for item in entries:
            self.console.print(Text.assemble(
                "  ", (item.name, "white"), " - ",
                (str(item.line_count), "bright_black"), " lines, ",
                (str(item.max_width), "bright_black"), " chars wide"))

    def list_art(self, category: Optional[str] = None) -> int:
        self.say("🎨 Available ASCII Art", "header")
        self.console.print()

        if category:
            entries = self.catalog.get_category(category)
            if not entries:
                self.say(f'❌ Category "{category}" not found or empty', "error")
                return 1
            self.say(f"📂 {category.upper()}: ({len(entries)} items)", "accent")
            self._print_entries(entries)
            return 0

        for cat in self.catalog.get_categories():
            entries = self.catalog.get_category(cat)
            self.say(f"📂 {cat.upper()}: ({len(entries)} items)", "accent")
            self._print_entries(entries)
            self.console.print()
        return 0

    def show_categories(self):
        self.say("📂 Available Categories", "header")
        self.console.print()
        for category in self.catalog.get_categories():
            count = len(self.catalog.get_category(category))
            self.console.print(Text.assemble((category, "cyan"), " - ",
                                             (str(count), "white"), " artworks"))
        self.console.print()
        self.say('Use "mdsaad show list --category <name>" to list art in a category', "muted")

    def search_art(self, query: str, options: Dict[str, Any]) -> int:
        self.say(f'🔍 Searching for: "{query}"', "header")
        self.console.print()

        limit = int(self._option(options, "limit", "search_limit", 10))
        results = self.catalog.search_art(query, category=options.get("category"),
                                          limit=limit, fuzzy=True)
        if not results:
            self.say("❌ No matching ASCII art found", "error")
            self.say('Try different search terms or browse categories with "mdsaad show categories"', "muted")
            return 1

        self.say(f"✅ Found {len(results)} result(s):", "success")
        self.console.print()
        for index, result in enumerate(results, 1):
            self.console.print(Text.assemble((f"{index}.", "white"), " ", (result.name, "cyan"),
                                             " (", (result.category, "bright_black"), ")"))
            self.say(f"   {result.description}", "muted")
            self.console.print(Text.assemble(("   Match score: ", "bright_black"),
                                             (str(result.score), "white")))
            self.console.print()

        self.say('Use "mdsaad show <name>" to display any of these artworks', "muted")
        return 0

    def show_random_art(self, options: Dict[str, Any]) -> int:
        self.say("🎲 Random ASCII Art", "header")
        self.console.print()

        art = self.catalog.get_random_art(options.get("category"))
        if art is None:
            self.say("❌ No art available", "error")
            return 1

        metadata = self.catalog.get_metadata(art)
        return self.render_result(SearchResult(metadata=metadata, art=art, score=0), options)

    def show_popular_art(self, options: Dict[str, Any]) -> int:
        self.say("⭐ Popular ASCII Art", "header")
        self.console.print()

        limit = options.get("limit") or self.settings.get("popular_limit", 5)
        popular = self.catalog.get_popular_art(int(limit), options.get("category"))
        if not popular:
            self.say("❌ No popular art available", "error")
            return 1

        for index, item in enumerate(popular, 1):
            self.console.print(Text.assemble((f"{index}.", "white"), " ", (item.name, "cyan"),
                                             " (", (item.category, "bright_black"), ")"))
            self.say(f"   {item.description}", "muted")
            self.console.print(Text.assemble(("   Popularity: ", "bright_black"),
                                             (f"{item.popularity}/100", "white")))
            self.console.print()

        self.say('Use "mdsaad show <name>" to display any of these artworks', "muted")
        return 0

    def show_statistics(self):
        self.say("📊 ASCII Art Database Statistics", "header")
        self.console.print()

        stats = self.catalog.get_statistics()
        for label, value in (("Total Artworks:", stats["total_art"]),
                             ("Categories:", stats["categories"]),
                             ("Average Size:", f"{stats['average_size']} characters")):
            self.console.print(Text.assemble((label, "cyan"), " ", (str(value), "white")))
        self.console.print()

        self.say("Category Breakdown:", "accent")
        for category, count in stats["category_breakdown"].items():
            self.console.print(Text.assemble("  ", (category, "white"), ": ",
                                             (f"{count} artworks", "bright_black")))
        self.console.print()

        if stats["largest_art"]:
            largest = stats["largest_art"]
            self.console.print(Text.assemble(("Largest Artwork:", "cyan"), " ",
                                             (largest["name"], "white"), f" ({largest['size']} chars)"))
        if stats["smallest_art"]:
            smallest = stats["smallest_art"]
            self.console.print(Text.assemble(("Smallest Artwork:", "cyan"), " ",
                                             (smallest["name"], "white"), f" ({smallest['size']} chars)"))

    def show_color_schemes(self):
        self.say("🎨 Available Color Schemes", "header")
        self.console.print()
        for name, colors in COLOR_SCHEMES.items():
            line = Text.assemble((name, "cyan"), ": ")
            for index, color in enumerate(colors):
                if index:
                    line.append(", ")
                line.append(color.value, style=RICH_STYLES[color])
            self.console.print(line)
        self.console.print()
        self.say(f"Colors: {', '.join(self.engine.get_available_colors())}", "muted")
        self.say("Use --color-scheme <name> to apply a color scheme", "muted")

    def show_animations(self):
        self.say("🎬 Available Animations", "header")
        self.console.print()
        for mode, description in ANIMATION_DESCRIPTIONS.items():
            self.console.print(Text.assemble((mode.value, "cyan"), ": ", (description, "bright_black")))
        self.console.print()
        self.say("Use --animated --animation <name> to apply an animation", "muted")

    def show_help(self):
        help_text = Text()
        sections = [
            ("Basic Usage:", [
                ("mdsaad show <artname>", "Display ASCII art"),
                ("mdsaad show batman", "Show Batman ASCII art"),
                ("mdsaad show superman --animated", "Animated Superman art"),
            ]),
            ("Art Management:", [
                ("mdsaad show list", "List all available art"),
                ("mdsaad show list --category logos", "List art in category"),
                ("mdsaad show categories", "Show all categories"),
                ("mdsaad show search --query hero", "Search for art"),
                ("mdsaad show random", "Display random art"),
                ("mdsaad show popular", "Show popular art"),
                ("mdsaad show refresh", "Reload art and metadata"),
            ]),
            ("Display Options:", [
                ("-a, --animated", "Enable animations"),
                ("--animation <type>", "Animation type (typewriter, fadein, etc.)"),
                ("-c, --color <color>", "Set text color"),
                ("--color-scheme <scheme>", "Apply color scheme"),
                ("-w, --width <number>", "Maximum display width"),
                ("--speed <ms>", "Animation speed (milliseconds)"),
                ("--direction <dir>", "Slide direction (left, right, top, bottom)"),
            ]),
            ("Information:", [
                ("mdsaad show stats", "Show database statistics"),
                ("mdsaad show colors", "List color schemes"),
                ("mdsaad show animations", "List animation types"),
            ]),
        ]
        for title, rows in sections:
            help_text.append(f"{title}\n", style="bold cyan")
            for usage, description in rows:
                help_text.append(f"  {usage:<36}", style="white")
                help_text.append(f"→  {description}\n", style="bright_black")
            help_text.append("\n")
        help_text.append("Examples:\n", style="bold cyan")
        for example in ("mdsaad show batman --animated --animation typewriter",
                        "mdsaad show mdsaad --color-scheme rainbow",
                        "mdsaad show cat --animated --animation wave --speed 50",
                        'mdsaad show search --query "super" --category superheroes'):
            help_text.append(f"  {example}\n", style="yellow")
        help_text.rstrip()
        self.console.print(Panel(help_text, title="🎨 ASCII Art Display System Help",
                                 border_style="yellow", expand=False))

    def handle_error(self, error: Exception) -> int:
        self.say(f"❌ ASCII art display failed: {error}", "error")
        if isinstance(error, NotInitializedError):
            self.say("💡 Try restarting the command or check file permissions", "warning")
        elif isinstance(error, CatalogLoadError):
            self.say("💡 Check the art_dir setting: mdsaad config get art_dir", "warning")
        self.say('Use "mdsaad show help" for usage information', "muted")
        return 1


# --- Configuration command ---

def config_command(console: Console, manager: ConfigurationManager, action: str,
                   key: Optional[str] = None, value: Optional[str] = None) -> int:
    """Show or edit the mdsaad configuration."""
    if action == "path":
        console.print(str(manager.config_file), highlight=False)
        return 0

    if action == "reset":
        if manager.reset_to_defaults():
            print_with_rich(console, "🔄 Configuration reset to defaults", "success")
            return 0
        print_with_rich(console, "❌ Failed to reset configuration", "error")
        return 1

    config = manager.load_config(use_cache=False)

    if action == "get":
        if not key:
            print_with_rich(console, "Usage: mdsaad config get <key>", "info")
            return 1
        if key not in config:
            print_with_rich(console, f"❌ Unknown configuration key: {key}", "error")
            return 1
        console.print(repr(config[key]) if isinstance(config[key], str) else str(config[key]),
                      highlight=False)
        return 0

    if action == "set":
        if not key or value is None:
            print_with_rich(console, "Usage: mdsaad config set <key> <value>", "info")
            return 1
        if key not in manager.defaults or key.startswith("_"):
            print_with_rich(console, f"❌ Unknown configuration key: {key}", "error")
            return 1
        try:
            typed_value = coerce_value(key, value, manager.defaults)
        except ValueError as e:
            print_with_rich(console, f"❌ {e}", "error")
            return 1
        if not manager.set_value(key, typed_value):
            print_with_rich(console, f"❌ Failed to save {key}", "error")
            return 1
        stored = manager.load_config(use_cache=False).get(key)
        if stored != typed_value:
            print_with_rich(console, f"⚠️ Invalid value for {key}, kept {stored!r}", "warning")
            return 1
        print_with_rich(console, f"✅ {key} = {stored!r}", "success")
        return 0

    print_with_rich(console, "🔧 mdsaad Configuration", "success")
    console.print("═" * 50, highlight=False)
    for name in sorted(k for k in config if not k.startswith("_")):
        console.print(Text.assemble(("  ", ""), (f"{name:<20}", "cyan"), (repr(config[name]), "white")))
    console.print()
    print_with_rich(console, f"Config file: {manager.config_file}", "muted")
    cache_stats = MetadataCache(manager.cache_dir).stats()
    print_with_rich(console, f"Metadata cache: {cache_stats['total_entries']} entries, "
                             f"{cache_stats['total_size']} bytes in {cache_stats['cache_dir']}", "muted")
    return 0


# --- Wiring ---

def build_catalog(settings: Dict[str, Any], cache_dir: Path) -> ArtCatalog:
    art_dir = settings.get("art_dir") or ""
    root = Path(art_dir).expanduser() if art_dir else mdsaad_art.ART_ROOT
    ttl_hours = settings.get("metadata_ttl_hours", 24)
    ttl_ms = int(ttl_hours * 60 * 60 * 1000) if ttl_hours else METADATA_TTL_MS
    return ArtCatalog(FileSystemStorage(root), cache=MetadataCache(cache_dir), metadata_ttl_ms=ttl_ms)


def setup_signal_handlers(engine: RenderEngine):
    """Stop a running animation on SIGTERM/SIGQUIT before exiting."""
    def handle_termination(signum, frame):
        engine.stop_animation()
        raise SystemExit(128 + signum)

    for name in ("SIGTERM", "SIGQUIT"):
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        try:
            signal.signal(signum, handle_termination)
        except (OSError, ValueError):
            pass  # not in the main thread, or not supported on this platform


def positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {raw!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {raw}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mdsaad",
                                     description="ASCII art display system for the terminal")
    parser.add_argument("-v", "--version", action="store_true", help="Show version information")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    parser.add_argument("--config-dir", help="Configuration directory (default ~/.config-mdsaad)")

    sub = parser.add_subparsers(dest="command")

    show = sub.add_parser("show", help="Display, list and search ASCII art")
    show.add_argument("art_name", nargs="?", default="help",
                      help="Art name or one of: " + ", ".join(SHOW_KEYWORDS))
    show.add_argument("-a", "--animated", action="store_true", default=None, help="Enable animations")
    show.add_argument("--animation", help="Animation type (typewriter, fadein, slidein, matrix, pulse, wave)")
    show.add_argument("-c", "--color", help="Text color")
    show.add_argument("--color-scheme", dest="color_scheme",
                      help="Color scheme (" + ", ".join(COLOR_SCHEMES) + ")")
    show.add_argument("-w", "--width", type=positive_int, help="Maximum display width")
    show.add_argument("--speed", type=positive_int, help="Animation speed in milliseconds")
    show.add_argument("--direction", help="Slide direction (left, right, top, bottom)")
    show.add_argument("--category", help="Filter by category")
    show.add_argument("--query", help="Search query for finding art")
    show.add_argument("--limit", type=positive_int, help="Limit search results")

    config = sub.add_parser("config", help="Show or edit configuration")
    config.add_argument("action", nargs="?", default="show",
                        choices=["show", "get", "set", "reset", "path"])
    config.add_argument("key", nargs="?")
    config.add_argument("value", nargs="?")

    completion = sub.add_parser("completion", help="Print a shell completion script")
    completion.add_argument("shell", nargs="?", default="bash", choices=SUPPORTED_SHELLS)

    sub.add_parser("shell", help="Interactive ASCII art shell")
    return parser


class Application:
    """Loaded configuration plus the catalog, engine and show command built from it."""

    def __init__(self, config_dir: Optional[str] = None, console: Optional[Console] = None,
                 verbose: bool = False):
        self.console = console or Console(highlight=False)
        self.config_manager = get_config_manager(config_dir)
        self.settings = self.config_manager.load_config()

        level = "DEBUG" if verbose else self.settings.get("log_level", "WARNING")
        log_dir = self.config_manager.config_dir if self.settings.get("log_to_file", True) else None
        setup_logging(level, log_dir)

        self.catalog = build_catalog(self.settings, self.config_manager.cache_dir)
        self.engine = RenderEngine(TerminalSink(console=self.console))
        self.show = ShowCommand(self.catalog, self.engine, self.console, self.settings)

    def dispatch(self, args: argparse.Namespace) -> int:
        if args.command == "show":
            options = {key: getattr(args, key) for key in
                       ("animated", "animation", "color", "color_scheme", "width", "speed",
                        "direction", "category", "query", "limit")}
            return self.show.execute(args.art_name, options)
        if args.command == "config":
            return config_command(self.console, self.config_manager, args.action, args.key, args.value)
        if args.command == "completion":
            return self.print_completion(args.shell)
        if args.command == "shell":
            return self.run_shell()
        show_compact_help(self.console)
        return 0

    def _catalog_names(self) -> List[str]:
        if not self.catalog.is_initialized():
            self.catalog.initialize()
        names = []
        for category in self.catalog.get_categories():
            names.extend(art.name for art in self.catalog.get_category(category))
        return list(dict.fromkeys(names))

    def print_completion(self, shell: str) -> int:
        try:
            names = self._catalog_names()
            categories = self.catalog.get_categories()
        except CatalogLoadError as e:
            log.warning("Completing without art names: %s", e)
            names, categories = [], []
        script = generate_completion(shell, names, categories,
                                     self.engine.get_animation_types(), list(COLOR_SCHEMES))
        self.console.file.write(script)
        self.console.file.flush()
        return 0

    def run_shell(self) -> int:
        """Interactive prompt: each line is a show command or a full mdsaad command."""
        try:
            names = self._catalog_names()
        except CatalogLoadError as e:
            return self.show.handle_error(e)

        completer = WordCompleter(
            shell_words(names, self.catalog.get_categories(),
                        self.engine.get_animation_types(), list(COLOR_SCHEMES)),
            ignore_case=True)
        history_file = self.config_manager.config_dir / "history"
        prompt_session = PromptSession(history=FileHistory(str(history_file)),
                                       auto_suggest=AutoSuggestFromHistory())
        parser = build_parser()

        print_with_rich(self.console, "🎨 mdsaad shell - type an art name, a keyword or 'exit'", "info")
        log_session("Shell started")
        while True:
            try:
                line = prompt_session.prompt([("class:prompt", "mdsaad"), ("class:arrow", " ❯ ")],
                                             style=PROMPT_STYLE, completer=completer,
                                             complete_while_typing=True)
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            line = line.strip()
            if not line:
                continue
            if line in ("exit", "quit"):
                break

            try:
                words = shlex.split(line)
            except ValueError as e:
                print_with_rich(self.console, f"❌ {e}", "error")
                continue
            if words[0] not in ("show", "config", "completion"):
                words.insert(0, "show")

            try:
                args = parser.parse_args(words)
            except SystemExit:
                continue
            self.dispatch(args)

        log_session("Shell closed")
        return 0


def show_version(console: Console):
    """Display version information."""
    console.print("")
    console.print(Text.assemble(("mdsaad ", "bold bright_cyan"), (MDSAAD_VERSION, "bold bright_green")))
    console.print(Text("ASCII art display system", style="bright_white"))
    console.print(Text(f"Python {platform.python_version()}", style="dim white"))
    console.print(Text(f"Platform: {platform.system()}", style="dim white"))
    console.print("")


def show_compact_help(console: Console):
    """Display compact help."""
    console.print("")
    console.print(Text("mdsaad - ASCII art display system", style="bold bright_cyan"))
    console.print("")
    console.print(Text("Usage:", style="bold bright_white"))
    console.print(Text("  mdsaad [OPTIONS] COMMAND [ARGS]", style="white"))
    console.print("")
    console.print(Text("Commands:", style="bold bright_white"))
    for usage, description in (("show <name|keyword>", "Display, list and search ASCII art"),
                               ("config [action]", "Show or edit configuration"),
                               ("completion [shell]", "Print a bash/zsh/fish completion script"),
                               ("shell", "Interactive ASCII art shell")):
        console.print(Text(f"  {usage:<22}{description}", style="green"))
    console.print("")
    console.print(Text("Options:", style="bold bright_white"))
    console.print(Text("  -h, --help            Show this help message", style="green"))
    console.print(Text("  -v, --version         Show version information", style="green"))
    console.print(Text("  --verbose             Log debug output", style="green"))
    console.print("")
    console.print(Text("Quick Start:", style="bold bright_white"))
    console.print(Text("  mdsaad show help", style="yellow"))
    console.print("")


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console(highlight=False)

    if args.version:
        show_version(console)
        return 0

    app = Application(args.config_dir, console=console, verbose=args.verbose)
    setup_signal_handlers(app.engine)
    try:
        return app.dispatch(args)
    except KeyboardInterrupt:
        app.engine.stop_animation()
        print_with_rich(console, "\n⚠️  Operation cancelled (Ctrl+C)", "warning")
        return 130


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
