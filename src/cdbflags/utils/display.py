from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.style import Style
from .lang import source_label
from .state import QueryState

# Theme Colors (Mosaic)
C_BG = "#EBEEEE"
C_TEXT = "#191A1A"
C_ACCENT1 = "#45d3ee" # Cyan
C_ACCENT2 = "#9FBFC5" # Muted Blue
C_ACCENT3 = "#94bfc1" # Teal
C_ACCENT4 = "#fecd91" # Orange


def _hex_to_rgb(color: str):
    return tuple(int(color[i:i + 2], 16) for i in (1, 3, 5))


def create_gradient_header(title: str, start: str = C_ACCENT1, end: str = C_ACCENT4) -> Text:
    """Panel title fading from `start` to `end`, character by character."""
    text = Text(f" {title} ", style=Style(bold=True))
    start_rgb = _hex_to_rgb(start)
    end_rgb = _hex_to_rgb(end)

    for i in range(len(text)):
        ratio = i / len(text)
        rgb = [int(s + (e - s) * ratio) for s, e in zip(start_rgb, end_rgb)]
        text.stylize("#{:02x}{:02x}{:02x}".format(*rgb), i, i + 1)
    return text


def build_result_table(state: QueryState, show_all: bool = False) -> Table:
    table = Table(
        header_style=f"bold {C_ACCENT1}",
        box=None,
        row_styles=["", "on #f5f7f7"],
        expand=True
    )
    table.add_column("#", style=f"bold {C_ACCENT1}", no_wrap=True)
    table.add_column("Working Directory", style=C_ACCENT3)
    table.add_column("Flags", style=C_TEXT)

    candidates = state.candidates if show_all else state.candidates[:1]
    for i, options in enumerate(candidates):
        table.add_row(str(i + 1), state.working_dirs[i], " ".join(options))
    return table


def render_state(state: QueryState, show_all: bool = False) -> Panel:
    """Wraps the query outcome in a Panel for the terminal."""
    summary = Text()
    summary.append(f"{source_label(state.queried_path)}: ", style=f"bold {C_ACCENT4}")
    summary.append(state.queried_path + "\n")
    summary.append("Database: ", style=f"bold {C_ACCENT4}")
    summary.append((state.database_path or "none found") + "\n")
    summary.append("Match: ", style=f"bold {C_ACCENT4}")
    if state.match_kind == "directory":
        summary.append(f"directory {state.matched_directory}")
    else:
        summary.append(state.match_kind or "none")
    if state.dropped_entries:
        summary.append(f"\n{state.dropped_entries} unusable database entries skipped", style=C_ACCENT2)

    body = Table.grid(expand=True)
    body.add_row(summary)
    if state.has_flags:
        body.add_row(Text(""))
        body.add_row(build_result_table(state, show_all))

    return Panel(
        body,
        title=create_gradient_header("CDBFLAGS"),
        title_align="left",
        border_style=C_ACCENT2,
        padding=(1, 2),
        style=f"{C_TEXT} on {C_BG}"
    )


def display_state(state: QueryState, show_all: bool = False, console: Console = None):
    console = console or Console()
    console.print(render_state(state, show_all))
