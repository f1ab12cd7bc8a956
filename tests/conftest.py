import random
from typing import List, Tuple

import matplotlib
import pytest

matplotlib.use("Agg")

from graph_model import Graph  # noqa: E402
from mst_utils.functions import parse_graph_text  # noqa: E402

SCENARIO_TEXT = """4 5
A B C D
e1 A B 2
e2 B C 6
e3 C D 1
e4 A D 5
e5 B D 3
"""


@pytest.fixture
def scenario_graph() -> Graph:
    return parse_graph_text(SCENARIO_TEXT)


def random_graph_text(
    n: int,
    density: float,
    seed: int,
    min_weight: int = 1,
    max_weight: int = 20,
    connected: bool = True,
) -> str:
    """Random simple graph in the text format; a spanning path is laid first when connected."""
    rng = random.Random(seed)
    names = [f"v{i}" for i in range(n)]
    pairs: List[Tuple[int, int]] = []
    if connected:
        order = list(range(n))
        rng.shuffle(order)
        pairs.extend((order[i], order[i + 1]) for i in range(n - 1))
    taken = {frozenset(p) for p in pairs}
    for i in range(n):
        for j in range(i + 1, n):
            if frozenset((i, j)) not in taken and rng.random() < density:
                pairs.append((i, j))
                taken.add(frozenset((i, j)))
    rng.shuffle(pairs)

    lines = [f"{n} {len(pairs)}", " ".join(names)]
    for k, (i, j) in enumerate(pairs):
        lines.append(f"e{k} {names[i]} {names[j]} {rng.randint(min_weight, max_weight)}")
    return "\n".join(lines) + "\n"
