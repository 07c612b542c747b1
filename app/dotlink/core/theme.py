"""Terminal styles for dotlink output.

Styles are read from the bundled ``data/theme.toml``: one named style per
message kind and one ``state.<value>`` style per entry state.
"""

import tomllib
from functools import cache
from importlib import resources

from rich.theme import Theme

from dotlink.models.link import LinkState

THEME_RESOURCE = "theme.toml"


def state_style(state: LinkState) -> str:
    """Name of the Rich style used to render an entry state."""
    return f"state.{state.value}"


def load_styles() -> dict[str, str]:
    """Read the bundled style table.

    Returns:
        Mapping of style name to Rich style definition.
    """
    text = resources.files("dotlink.data").joinpath(THEME_RESOURCE).read_text(encoding="utf-8")
    return dict(tomllib.loads(text)["styles"])


@cache
def get_theme() -> Theme:
    """Rich theme built from the bundled styles, loaded once."""
    return Theme(load_styles())
