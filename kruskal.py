# kruskal.py
from __future__ import annotations

import argparse
import enum
import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from graph_model import Edge, Graph
from mst_utils.functions import parse_graph_file, parse_graph_text

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    ACCEPT = "accept"
    REJECT = "reject"


class Reason(str, enum.Enum):
    OK = "ok"
    # also used when an endpoint is not a known vertex
    CYCLE = "cycle"


@dataclass(frozen=True)
class StepRecord:
    """One Kruskal decision, with the cumulative accepted/rejected ids after it."""
    considered_edge_id: str
    action: Action
    reason: Reason
    total_weight: int
    mst_edge_ids: Tuple[str, ...]
    rejected_edge_ids: Tuple[str, ...]

    @property
    def accepted(self) -> bool:
        return self.action is Action.ACCEPT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "consideredEdgeId": self.considered_edge_id,
            "action": self.action.value,
            "reason": self.reason.value,
            "totalWeight": self.total_weight,
            "mstEdgeIds": list(self.mst_edge_ids),
            "rejectedEdgeIds": list(self.rejected_edge_ids),
        }


@dataclass(frozen=True)
class KruskalTrace:
    steps: Tuple[StepRecord, ...]
    mst_weight: int

    @property
    def mst_edge_ids(self) -> Tuple[str, ...]:
        return self.steps[-1].mst_edge_ids if self.steps else ()

    @property
    def rejected_edge_ids(self) -> Tuple[str, ...]:
        return self.steps[-1].rejected_edge_ids if self.steps else ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "mstWeight": self.mst_weight,
        }


def kruskal_steps(graph: Graph) -> KruskalTrace:
    """
    Kruskal's algorithm, recorded one decision per edge.

    Edges are visited in non-decreasing weight order (ties in input order). An edge
    whose endpoint is not a known vertex is rejected with reason "cycle", the same
    signal a real cycle produces.

    Returns:
      KruskalTrace(steps, mst_weight) with exactly graph.num_edges steps.
    """
    edges_sorted = graph.sort_edges_by_weight()
    graph.make_sets()

    mst_edge_ids: List[str] = []
    rejected_edge_ids: List[str] = []
    total_weight = 0
    steps: List[StepRecord] = []

    for e in edges_sorted:
        a = graph.index_of(e.src)
        b = graph.index_of(e.dst)

        if a is None or b is None:
            logger.debug("edge %s has an unknown endpoint (%s, %s)", e.id, e.src, e.dst)
            accepted = False
        else:
            accepted = graph.union(a, b)

        if accepted:
            mst_edge_ids.append(e.id)
            total_weight += e.weight
        else:
            rejected_edge_ids.append(e.id)

        step = StepRecord(
            considered_edge_id=e.id,
            action=Action.ACCEPT if accepted else Action.REJECT,
            reason=Reason.OK if accepted else Reason.CYCLE,
            total_weight=total_weight,
            mst_edge_ids=tuple(mst_edge_ids),
            rejected_edge_ids=tuple(rejected_edge_ids),
        )
        logger.debug("%s %s (w=%d) total=%d", step.action.value, e.id, e.weight, total_weight)
        steps.append(step)

    metrics = graph.op_metrics()
    logger.info(
        "kruskal done: %d steps, %d accepted, W=%d, find=%d union=%d",
        len(steps), len(mst_edge_ids), total_weight,
        metrics["find_calls"], metrics["union_calls"],
    )
    return KruskalTrace(steps=tuple(steps), mst_weight=total_weight)


def kruskal_mst(graph: Graph) -> Tuple[List[Edge], int]:
    """
    Classic Kruskal result.

    Returns:
      mst_edges (in acceptance order), total_weight
    """
    trace = kruskal_steps(graph)
    by_id = {e.id: e for e in graph.edges}
    return [by_id[edge_id] for edge_id in trace.mst_edge_ids], trace.mst_weight


def trace_to_json(trace: KruskalTrace, indent: Optional[int] = None) -> str:
    if indent is None:
        return json.dumps(trace.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(trace.to_dict(), indent=indent, ensure_ascii=False)


def run_kruskal_steps_json(input_text: str) -> str:
    """Parse the "V E / vertices / edges" text format and return the step trace as JSON."""
    graph = parse_graph_text(input_text)
    return trace_to_json(kruskal_steps(graph))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run Kruskal step-by-step on a graph text file.")
    parser.add_argument("--graph", required=True, help="Path to graph text file ('-' for stdin)")
    parser.add_argument("--json-out", default=None, help="Write the trace JSON here instead of stdout")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
    parser.add_argument("--plot", action="store_true", help="Open the interactive step replay")
    parser.add_argument("--save-plot", default=None, help="Save the final MST figure to this path")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.graph == "-":
            graph = parse_graph_text(sys.stdin.read())
        else:
            graph = parse_graph_file(Path(args.graph))
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    n = graph.num_vertices
    m = graph.num_edges

    t0 = time.perf_counter()
    trace = kruskal_steps(graph)
    t1 = time.perf_counter()
    elapsed_ms = (t1 - t0) * 1000.0
    op_metrics = graph.op_metrics()

    payload = trace_to_json(trace, indent=args.indent)
    if args.json_out is not None:
        out = Path(args.json_out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload + "\n", encoding="utf-8")
    else:
        print(payload)

    print(f"kruskal | n={n} m={m} | W={trace.mst_weight} | "
          f"accepted={len(trace.mst_edge_ids)} rejected={len(trace.rejected_edge_ids)} | "
          f"find={op_metrics['find_calls']} union={op_metrics['union_calls']} | "
          f"time={elapsed_ms:.3f}ms", file=sys.stderr)

    if args.plot or args.save_plot:
        # matplotlib is only needed for the viewer
        from mst_utils.plotting import InteractiveKruskalReplay, plot_mst_result

        if args.save_plot:
            plot_mst_result(
                graph,
                trace,
                title=f"Kruskal MST | W={trace.mst_weight}",
                save_path=args.save_plot,
                show=False,
            )
        if args.plot:
            InteractiveKruskalReplay(graph, trace, title="Kruskal step replay").show()

    return 0


if __name__ == "__main__":
    sys.exit(main())
