from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from flights import SearchRequest, read_edge_records, read_search_requests
from graph import Graph, Snapshot
from report import describe_path, flight_header


RANK_COLOURS = ("#d62728", "#ff7f0e", "#1f77b4")
RANK_WIDTHS = (4.0, 3.0, 2.0)


def build_networkx_graph(graph: Graph) -> nx.DiGraph:
    g = nx.DiGraph()
    g.add_nodes_from(vertex.name for vertex in graph.vertices)
    for vertex in graph.vertices:
        for neighbour in vertex.adjacency:
            edge = graph.edge_between(vertex.name, neighbour.name)
            g.add_edge(edge.origin, edge.target, cost=edge.cost, time=edge.time)
    return g


def compute_layout(graph_nx: nx.DiGraph) -> Dict[str, Tuple[float, float]]:
    return nx.spring_layout(graph_nx, seed=42)


def route_edges(path: Sequence[str]) -> List[Tuple[str, str]]:
    return list(zip(path[:-1], path[1:]))


def draw_ranked_paths(
    graph: Graph,
    request: SearchRequest,
    snapshots: Sequence[Optional[Snapshot]],
    output: Path | None,
    show: bool,
    title: str | None = None,
) -> None:
    graph_nx = build_networkx_graph(graph)
    layout = compute_layout(graph_nx)

    fig, ax = plt.subplots(figsize=(10, 8))

    nx.draw_networkx_edges(graph_nx, layout, ax=ax, edge_color="lightgray", width=1.0)

    # Draw the worst rank first so the best path ends up on top.
    for rank in reversed(range(len(snapshots))):
        snapshot = snapshots[rank]
        if snapshot is None:
            continue
        edges = route_edges(snapshot.names())
        if not edges:
            continue
        nx.draw_networkx_edges(
            graph_nx,
            layout,
            edgelist=edges,
            edge_color=RANK_COLOURS[rank],
            width=RANK_WIDTHS[rank],
            ax=ax,
        )

    endpoints = {request.source, request.destination}
    node_colours = [
        "#2ca02c" if node in endpoints else "#c7e9c0" for node in graph_nx.nodes
    ]
    nx.draw_networkx_nodes(graph_nx, layout, node_color=node_colours, node_size=600, ax=ax)
    nx.draw_networkx_labels(graph_nx, layout, font_size=9, ax=ax)

    edge_labels = {
        (u, v): f"{data['cost']}/{data['time']}" for u, v, data in graph_nx.edges(data=True)
    }
    nx.draw_networkx_edge_labels(graph_nx, layout, edge_labels=edge_labels, font_size=8, ax=ax)

    summary_lines = [
        f"Path {rank}: {describe_path(snapshot, request.source)}"
        for rank, snapshot in enumerate(snapshots, start=1)
    ]
    ax.text(
        1.02,
        0.5,
        "\n".join(summary_lines),
        transform=ax.transAxes,
        va="center",
        fontsize=10,
        bbox=dict(facecolor="white", alpha=0.8, boxstyle="round"),
    )

    ax.set_axis_off()
    ax.set_title(title or f"{request.source} to {request.destination} by {request.metric.name}")

    if output:
        fig.savefig(output, bbox_inches="tight")
    if show:
        plt.show()
    else:
        plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Visualise the three ranked paths of one flight search."
    )
    parser.add_argument("--graph", type=Path, required=True, help="Graph file (from|to|cost|time).")
    parser.add_argument("--searches", type=Path, required=True, help="Search file (from|to|C or T).")
    parser.add_argument(
        "--flight",
        type=int,
        default=1,
        help="1-based number of the search to draw.",
    )
    parser.add_argument("--out", type=Path, help="Optional path to save a PNG of the figure.")
    parser.add_argument(
        "--no-show",
        action="store_true",
        help="Do not display the figure interactively.",
    )
    args = parser.parse_args()

    graph = Graph(read_edge_records(args.graph))
    requests = read_search_requests(args.searches)
    if not 1 <= args.flight <= len(requests):
        parser.error(f"--flight must be between 1 and {len(requests)}.")

    request = requests[args.flight - 1]
    snapshots = graph.ranked_paths(request.source, request.destination, request.metric)
    draw_ranked_paths(
        graph=graph,
        request=request,
        snapshots=snapshots,
        output=args.out,
        show=not args.no_show,
        title=flight_header(args.flight, request),
    )


if __name__ == "__main__":
    main()
