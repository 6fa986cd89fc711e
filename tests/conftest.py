import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from art_catalog import ArtCatalog, FileSystemStorage, PopularityProvider
from metadata_cache import MemoryCache
from terminal import TerminalSink


class FixedPopularity(PopularityProvider):
    """Popularity scores from a dict, 50 for anything unlisted."""

    def __init__(self, scores=None):
        self.scores = scores or {}
        self.calls = []

    def score(self, category, name):
        self.calls.append((category, name))
        return self.scores.get(name, 50)


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now


def write_art_tree(root: Path, tree: dict) -> Path:
    """Create ``root/<category>/<name>.txt`` files from a nested dict."""
    for category, files in tree.items():
        category_dir = root / category
        category_dir.mkdir(parents=True, exist_ok=True)
        for name, content in files.items():
            (category_dir / f"{name}.txt").write_text(content, encoding="utf-8")
    return root


SAMPLE_TREE = {
    "superheroes": {
        "batman": " /\\_/\\\n(  B  )\n  ||",
        "superman": " ___\n/ S \\\n\\___/",
    },
    "logos": {
        "github": "GH\n--",
        "node": "[node]",
    },
    "animals": {
        "cat": "ΛΛ\n(•ㅅ•)",
        "owl": "{o,o}\n/)_)\n \" \"",
    },
}


@pytest.fixture
def art_root(tmp_path):
    return write_art_tree(tmp_path / "art", SAMPLE_TREE)


@pytest.fixture
def popularity():
    return FixedPopularity()


@pytest.fixture
def memory_cache():
    return MemoryCache()


@pytest.fixture
def make_catalog(memory_cache, popularity):
    def factory(root, cache=memory_cache, provider=popularity, **kwargs):
        return ArtCatalog(FileSystemStorage(root), cache=cache, popularity=provider, **kwargs)
    return factory


@pytest.fixture
def catalog(art_root, make_catalog):
    cat = make_catalog(art_root)
    cat.initialize()
    return cat


def make_sink(color_system="standard", ansi=True, width=80, height=24):
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=True, color_system=color_system,
                      width=width, height=height)
    return TerminalSink(console=console, env={}, force_ansi=ansi), buffer


@pytest.fixture
def sink():
    return make_sink()


@pytest.fixture
def plain_sink():
    return make_sink(color_system=None, ansi=False)


@pytest.fixture(autouse=True)
def reset_mdsaad_logger():
    """Undo setup_logging() so caplog sees records from every test."""
    yield
    logger = logging.getLogger("mdsaad")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
