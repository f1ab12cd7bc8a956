# plotting.py
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import matplotlib.pyplot as plt

try:
    import mplcursors  # type: ignore
    _HAS_MPLCURSORS = True
except Exception:
    _HAS_MPLCURSORS = False

from graph_model import Edge, Graph
from mst_utils.functions import circular_layout

if TYPE_CHECKING:
    from kruskal import KruskalTrace

Coords = Dict[str, Tuple[float, float]]

IDLE = "idle"
CONSIDERED = "considered"
ACCEPTED = "accepted"
REJECTED = "rejected"
FINAL = "final"

# state -> matplotlib line kwargs
_EDGE_STYLE = {
    IDLE: dict(color="gray", linewidth=1.5, alpha=0.45, linestyle="-"),
    CONSIDERED: dict(color="red", linewidth=3.5, alpha=1.0, linestyle="-"),
    ACCEPTED: dict(color="darkred", linewidth=2.5, alpha=1.0, linestyle="-"),
    REJECTED: dict(color="gray", linewidth=1.5, alpha=0.15, linestyle="--"),
    FINAL: dict(color="#9CA3AF", linewidth=3.5, alpha=1.0, linestyle="-"),
}


def _ensure_dir(save_path: Optional[str | Path]) -> Optional[Path]:
    if save_path is None:
        return None
    p = Path(save_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def edge_styles_at(trace: KruskalTrace, edge_ids: Iterable[str], step_index: int) -> Dict[str, str]:
    """
    Display state of every edge at a replay position.

    step_index -1 is before the first step, 0..len(steps)-1 shows that step, and
    len(steps) is one extra position after the last step where the last considered
    edge is drawn neutral instead of highlighted.
    """
    steps = trace.steps
    if step_index < -1 or step_index > len(steps):
        raise IndexError(f"step_index {step_index} outside [-1, {len(steps)}]")

    ids = list(edge_ids)
    if step_index < 0 or not steps:
        return {edge_id: IDLE for edge_id in ids}

    post_final = step_index == len(steps)
    step = steps[-1] if post_final else steps[step_index]
    accepted = set(step.mst_edge_ids)
    rejected = set(step.rejected_edge_ids)

    states: Dict[str, str] = {}
    for edge_id in ids:
        if edge_id == step.considered_edge_id:
            states[edge_id] = FINAL if post_final else CONSIDERED
        elif edge_id in accepted:
            states[edge_id] = ACCEPTED
        elif edge_id in rejected:
            states[edge_id] = REJECTED
        else:
            states[edge_id] = IDLE
    return states


def _drawable(edge: Edge, coords: Coords) -> bool:
    return edge.src in coords and edge.dst in coords


class InteractiveKruskalReplay:
    """Step-by-step replay of a Kruskal trace (right/space: next, left: back, r: reset)."""

    def __init__(
        self,
        graph: Graph,
        trace: KruskalTrace,
        title: str,
        coords: Optional[Coords] = None,
    ):
        self.graph = graph
        self.trace = trace
        self.title = title
        self.node_names = graph.vertex_names
        self.coords = coords if coords is not None else circular_layout(self.node_names)
        self.edges = [e for e in graph.edges if _drawable(e, self.coords)]
        self.step_index = -1

        self.fig, self.ax = plt.subplots(figsize=(8, 7))
        self.fig.suptitle(title, fontsize=14)

        xs = [self.coords[name][0] for name in self.node_names]
        ys = [self.coords[name][1] for name in self.node_names]
        self.scatter = self.ax.scatter(xs, ys, s=120, c="blue", zorder=3)
        for name in self.node_names:
            x, y = self.coords[name]
            self.ax.annotate(name, (x, y), textcoords="offset points", xytext=(6, 6))

        # one line per edge, restyled on every step
        self.line_artists = []
        for e in self.edges:
            x1, y1 = self.coords[e.src]
            x2, y2 = self.coords[e.dst]
            (line,) = self.ax.plot([x1, x2], [y1, y2], zorder=1)
            mx, my = (x1 + x2) / 2, (y1 + y2) / 2
            self.ax.text(mx, my, str(e.weight), fontsize=9, ha="center", va="center",
                         bbox=dict(boxstyle="round,pad=0.15", fc="white", ec="none", alpha=0.8))
            self.line_artists.append(line)

        self.ax.axis("equal")
        self.ax.axis("off")
        self.info_text = self.fig.text(0.5, 0.02, "", ha="center", fontsize=10)

        self.cursor = None
        if _HAS_MPLCURSORS and self.line_artists:
            self.cursor = mplcursors.cursor(self.line_artists, hover=True)
            self.cursor.connect("add", self._on_hover)

        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.fig.tight_layout(rect=[0, 0.06, 1, 0.95])
        self._update_display()

    @property
    def max_index(self) -> int:
        return len(self.trace.steps)

    def _current_step(self):
        steps = self.trace.steps
        if self.step_index < 0 or not steps:
            return None
        return steps[min(self.step_index, len(steps) - 1)]

    def _on_hover(self, sel):
        i = self.line_artists.index(sel.artist)
        e = self.edges[i]
        state = edge_styles_at(self.trace, [e.id], self.step_index)[e.id]
        sel.annotation.set_text(f"edge: {e.id} ({e.src}, {e.dst})\nweight: {e.weight}\nstate: {state}")

    def _on_key(self, event):
        if event.key in ("right", " "):
            self.go_to(self.step_index + 1)
        elif event.key == "left":
            self.go_to(self.step_index - 1)
        elif event.key == "r":
            self.go_to(-1)

    def go_to(self, step_index: int) -> None:
        clamped = max(-1, min(step_index, self.max_index))
        if clamped != self.step_index:
            self.step_index = clamped
            self._update_display()

    def _update_display(self):
        states = edge_styles_at(self.trace, [e.id for e in self.edges], self.step_index)
        for e, line in zip(self.edges, self.line_artists):
            line.set(**_EDGE_STYLE[states[e.id]])

        step = self._current_step()
        if step is None:
            info = f"step 0/{len(self.trace.steps)} | W=0"
        else:
            shown = min(self.step_index + 1, len(self.trace.steps))
            info = (f"step {shown}/{len(self.trace.steps)} | {step.action.value} "
                    f"{step.considered_edge_id} ({step.reason.value}) | W={step.total_weight}")
            if self.step_index == self.max_index:
                info += f" | done, MST weight {self.trace.mst_weight}"
        self.info_text.set_text(info)
        self.fig.canvas.draw_idle()

    def show(self):
        plt.show()


def plot_mst_result(
    graph: Graph,
    trace: KruskalTrace,
    title: str,
    coords: Optional[Coords] = None,
    save_path: Optional[str | Path] = None,
    show: bool = True,
) -> None:
    names = graph.vertex_names
    if coords is None:
        coords = circular_layout(names)
    edges = [e for e in graph.edges if _drawable(e, coords)]
    states = edge_styles_at(trace, [e.id for e in edges], len(trace.steps))

    fig, ax = plt.subplots()
    xs = [coords[name][0] for name in names]
    ys = [coords[name][1] for name in names]
    sc = ax.scatter(xs, ys, zorder=3)

    line_artists = []
    line_meta: List[Edge] = []
    for e in edges:
        x1, y1 = coords[e.src]
        x2, y2 = coords[e.dst]
        # the last considered edge is still part of the final result
        state = states[e.id]
        if state == FINAL:
            state = ACCEPTED if e.id in trace.mst_edge_ids else REJECTED
        (ln,) = ax.plot([x1, x2], [y1, y2], zorder=1, **_EDGE_STYLE[state])
        line_artists.append(ln)
        line_meta.append(e)

    ax.set_title(title)
    ax.axis("equal")
    fig.tight_layout()

    if _HAS_MPLCURSORS:
        cursor = mplcursors.cursor([sc, *line_artists], hover=True)

        @cursor.connect("add")
        def _on_add(sel):
            artist = sel.artist
            if artist is sc:
                sel.annotation.set_text(f"node: {names[sel.index]}")
                return
            try:
                e = line_meta[line_artists.index(artist)]
                decision = "mst" if e.id in trace.mst_edge_ids else "rejected"
                sel.annotation.set_text(f"edge: {e.id} ({e.src}, {e.dst})\nweight: {e.weight}\n{decision}")
            except ValueError:
                sel.annotation.set_text("edge")

    p = _ensure_dir(save_path)
    if p is not None:
        fig.savefig(p, dpi=200)

    if show:
        plt.show()
    else:
        plt.close(fig)
