"""TradeGraph — directed multigraph of trade participants.

Nodes are participant ids; each trade adds one `buyer -> seller` edge.
Parallel edges are kept as counts so the same structure answers both the
wash-trading question (how often does one ordered pair repeat?) and the
circular-trading question (does money flow back round a cycle?).

Cycle enumeration is a bounded DFS rooted at each node, only extending to
nodes that sort after the root, so each simple cycle is reported once in
its canonical rotation. Cost is O(V * d^(k-1)) for max length k and max
out-degree d; the default k=2 reduces to a reciprocal-edge scan.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable

from src.cm_market.domain.models import Trade


class TradeGraph:
    def __init__(self) -> None:
        self._edges: Counter[tuple[str, str]] = Counter()
        self._adjacency: dict[str, set[str]] = defaultdict(set)

    @classmethod
    def from_trades(cls, trades: Iterable[Trade]) -> "TradeGraph":
        graph = cls()
        for trade in trades:
            graph.add_trade(trade.buyer_id, trade.seller_id)
        return graph

    def add_trade(self, buyer_id: str, seller_id: str) -> None:
        self._edges[(buyer_id, seller_id)] += 1
        self._adjacency[buyer_id].add(seller_id)

    @property
    def participants(self) -> set[str]:
        nodes = set(self._adjacency)
        for targets in self._adjacency.values():
            nodes |= targets
        return nodes

    def edge_count(self, buyer_id: str, seller_id: str) -> int:
        return self._edges.get((buyer_id, seller_id), 0)

    def pair_counts(self) -> dict[tuple[str, str], int]:
        """Trades per ordered (buyer, seller) pair."""
        return dict(self._edges)

    def has_edge(self, buyer_id: str, seller_id: str) -> bool:
        return seller_id in self._adjacency.get(buyer_id, ())

    def reciprocal_pairs(self) -> list[tuple[str, str]]:
        """Unordered pairs {a, b} (a < b) with both a->b and b->a present."""
        return [(a, b) for a, b in self.find_cycles(max_length=2)]

    def find_cycles(self, max_length: int = 2) -> list[tuple[str, ...]]:
        """Simple cycles of length 2..max_length. Self-trades are not cycles."""
        if max_length < 2:
            return []
        cycles: list[tuple[str, ...]] = []
        for root in sorted(self._adjacency):
            self._extend(root, [root], max_length, cycles)
        return cycles

    def _extend(
        self, root: str, path: list[str], max_length: int, out: list[tuple[str, ...]]
    ) -> None:
        for nxt in sorted(self._adjacency.get(path[-1], ())):
            if nxt == root:
                if len(path) >= 2:
                    out.append(tuple(path))
            elif nxt > root and nxt not in path and len(path) < max_length:
                path.append(nxt)
                self._extend(root, path, max_length, out)
                path.pop()
