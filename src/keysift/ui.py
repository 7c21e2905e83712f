from typing import Optional

from rich.console import Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from keysift.broadcast_latest import Subscriber
from keysift.progress_state import ProgressState, State


STATE_STYLES = {
    State.READY: "dim",
    State.WORKING: "bold yellow",
    State.FINISHED_SUCCESS: "bold spring_green2",
    State.FINISHED_FAIL: "bold red",
}


def render(state: Optional[ProgressState]):
    """Render the report snapshot."""
    if state is None:
        return Panel("Waiting for first update…", title="keysift", border_style="dim")

    style = STATE_STYLES[state.state]
    summary = Table.grid(padding=(0, 2))
    summary.add_column(justify="right", style="cyan")
    summary.add_column()
    summary.add_row("State", f"[{style}]{state.state.value}[/{style}]")
    summary.add_row("Elapsed", str(state.elapsed).split(".")[0])
    if state.total:
        summary.add_row("Total", f"{state.total:,}")
    if state.is_progress_visible or state.state.finished:
        bar = ProgressBar(total=100, completed=min(state.percent, 100), width=40)
        summary.add_row("Progress", Group(bar, Text(f"{state.percent:.1f}%")))

    body = Group(summary, Text(""), Text(state.message or "…"))
    return Panel(body, title=f"keysift  |  v{state.version}", border_style=style)


def ui_loop(subscriber: Subscriber[ProgressState]) -> None:
    """Redraw on every new snapshot until the report is closed."""
    with Live(render(None), refresh_per_second=30, screen=False) as live:
        while True:
            state = subscriber.next()
            if state is None:
                break
            live.update(render(state))
