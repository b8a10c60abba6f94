"""Interactive multi-select plugin picker."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from agent_plugins.installer.errors import UserCancelled

if TYPE_CHECKING:
    from agent_plugins.installer.models import PluginDescriptor


def pick_plugins_tui(
    plugins: list[PluginDescriptor], preselected: list[str] | None = None
) -> list[str]:
    """Show a checkbox list of plugins. Returns chosen names; raises UserCancelled on esc."""
    if not plugins:
        return []

    cursor = [0]
    checked = {p.name for p in plugins if p.name in (preselected or [])}
    state: dict[str, object] = {"done": False, "warning": ""}

    def _get_text():
        lines = [("bold", " Select plugins to install:\n")]
        for i, p in enumerate(plugins):
            sel = i == cursor[0]
            marker = ">" if sel else " "
            box = "[x]" if p.name in checked else "[ ]"
            lines.append(("bold" if sel else "", f" {marker} {box} {p.name}"))
            if p.description:
                lines.append(("dim", f"  {p.description[:60]}"))
            lines.append(("", "\n"))
        if state["warning"]:
            lines.append(("fg:yellow", f" {state['warning']}\n"))
        lines.append(("dim", "\n ↑/↓ navigate  space toggle  a all  enter confirm  esc cancel"))
        return lines

    kb = KeyBindings()

    @kb.add("up")
    @kb.add("k")
    def _up(event):
        cursor[0] = max(0, cursor[0] - 1)

    @kb.add("down")
    @kb.add("j")
    def _down(event):
        cursor[0] = min(len(plugins) - 1, cursor[0] + 1)

    @kb.add("space")
    def _toggle(event):
        name = plugins[cursor[0]].name
        if name in checked:
            checked.discard(name)
        else:
            checked.add(name)
        state["warning"] = ""

    @kb.add("a")
    def _toggle_all(event):
        if len(checked) == len(plugins):
            checked.clear()
        else:
            checked.update(p.name for p in plugins)

    @kb.add("enter")
    def _confirm(event):
        if not checked:
            state["warning"] = "select at least one plugin"
            return
        state["done"] = True
        event.app.exit()

    @kb.add("escape")
    @kb.add("q")
    @kb.add("c-c")
    def _cancel(event):
        event.app.exit()

    layout = Layout(HSplit([Window(FormattedTextControl(_get_text))]))
    app: Application = Application(layout=layout, key_bindings=kb, full_screen=False)
    app.run()
    if not state["done"]:
        raise UserCancelled()
    return [p.name for p in plugins if p.name in checked]
