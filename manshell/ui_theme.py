"""UI theme definitions and the text styling decorator.

Themes are semantic ANSI palettes. Rendering code asks for a tag such as
``"header"`` or ``"command"`` and never for a concrete color, so the plain
theme turns every decoration into the identity.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    subheader: str
    section: str
    philosophy: str
    command: str
    option: str
    dim: str
    border: str
    highlight: str
    accent: str
    error: str
    warning: str
    directory: str
    file: str
    prompt: str
    prompt_path: str
    status: str

    @property
    def is_plain(self) -> bool:
        return not self.reset


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;2;0;221;255m",
    subheader="\033[3;38;2;136;170;255m",
    section="\033[38;2;0;128;255m",
    philosophy="\033[38;2;0;255;136m",
    command="\033[1;38;2;170;255;255m",
    option="\033[38;2;102;204;255m",
    dim="\033[38;2;0;102;102m",
    border="\033[38;2;0;68;102m",
    highlight="\033[1;38;2;0;255;170m",
    accent="\033[1;38;2;255;0;255m",
    error="\033[38;2;255;0;80m",
    warning="\033[38;2;255;165;0m",
    directory="\033[38;2;0;128;255m",
    file="\033[38;2;0;255;136m",
    prompt="\033[38;2;0;255;255m",
    prompt_path="\033[38;2;0;128;255m",
    status="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    header="\033[1;38;5;45m",
    subheader="\033[3;38;5;153m",
    section="\033[1;38;5;39m",
    philosophy="\033[38;5;117m",
    command="\033[1;38;5;153m",
    option="\033[38;5;81m",
    dim="\033[2;38;5;110m",
    border="\033[2;38;5;31m",
    highlight="\033[1;30;43m",
    accent="\033[1;38;5;215m",
    error="\033[38;5;203m",
    warning="\033[38;5;215m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    prompt="\033[38;5;39m",
    prompt_path="\033[38;5;117m",
    status="\033[7m",
)

PLAIN_THEME = UITheme(**{f.name: "" for f in fields(UITheme) if f.name != "name"}, name="plain")

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def style(text: str, tag: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Decorate ``text`` with the palette entry named ``tag``.

    Unknown tags and the plain theme return ``text`` unchanged. Stripping
    ANSI sequences from the result always gives back ``text``.
    """
    code = getattr(theme, tag, "") if tag not in {"name", "reset"} else ""
    if not code or not isinstance(code, str):
        return text
    return f"{code}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "style",
]
