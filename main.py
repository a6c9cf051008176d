from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from flights import SearchRequest, load_config, read_edge_records, read_search_requests
from graph import Graph, MalformedInput
from logger_config import get_logger
from report import describe_path, flight_header, flight_lines, write_report


FILE_PROMPTS = (
    ("graph_file", "Graph file name:  "),
    ("search_file", "Search file name: "),
    ("results_file", "Result file name: "),
)


def resolve_settings(args: argparse.Namespace, config: Dict) -> Dict:
    """Merge config file values with command-line overrides."""
    settings = dict(config)
    overrides = {
        "graph_file": args.graph,
        "search_file": args.searches,
        "results_file": args.results,
        "log_level": args.log_level,
        "log_dir": args.log_dir,
        "plot_dir": args.plot_dir,
    }
    for key, value in overrides.items():
        if value is not None:
            settings[key] = value
    return settings


def prompt_missing_files(settings: Dict) -> None:
    missing = False
    for key, prompt in FILE_PROMPTS:
        if not settings.get(key):
            settings[key] = input(prompt).strip()
            missing = True
    if missing:
        print()


def run_searches(
    graph: Graph, requests: Sequence[SearchRequest], plot_dir: Optional[Path] = None
) -> List[str]:
    lines: List[str] = []
    for number, request in enumerate(requests, start=1):
        snapshots = graph.ranked_paths(request.source, request.destination, request.metric)
        paths = [describe_path(snapshot, request.source) for snapshot in snapshots]
        lines.extend(flight_lines(number, request, paths))

        if plot_dir is not None:
            from visualize import draw_ranked_paths

            plot_dir.mkdir(parents=True, exist_ok=True)
            draw_ranked_paths(
                graph=graph,
                request=request,
                snapshots=snapshots,
                output=plot_dir / f"flight_{number}.png",
                show=False,
                title=flight_header(number, request),
            )
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Find the three cheapest or fastest flight paths for every search."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("flights.yaml"),
        help="Path to the YAML run configuration.",
    )
    parser.add_argument("--graph", help="Graph file: a count line, then from|to|cost|time rows.")
    parser.add_argument("--searches", help="Search file: a count line, then from|to|C or T rows.")
    parser.add_argument("--results", help="File the report is written to.")
    parser.add_argument("--log-level", help="Logging level (default WARNING).")
    parser.add_argument("--log-dir", help="Directory for a rotating log file.")
    parser.add_argument("--plot-dir", help="Save a PNG of every flight's ranked paths here.")
    parser.add_argument(
        "--no-echo",
        action="store_true",
        help="Do not print the report to the console.",
    )
    args = parser.parse_args(argv)

    settings = resolve_settings(args, load_config(args.config))
    try:
        logger = get_logger(
            level=settings.get("log_level") or "WARNING", log_dir=settings.get("log_dir")
        )
    except ValueError as exc:
        parser.error(str(exc))
    prompt_missing_files(settings)

    files = [settings[key] for key, _ in FILE_PROMPTS]
    graph_file, search_file, results_file = (Path(name) for name in files)
    plot_dir = Path(settings["plot_dir"]) if settings.get("plot_dir") else None

    try:
        graph = Graph(read_edge_records(graph_file))
        requests = read_search_requests(search_file)
        logger.info(
            "Loaded %d vertices, %d edges and %d searches.",
            graph.vertex_count(),
            graph.edge_count(),
            len(requests),
        )
        lines = run_searches(graph, requests, plot_dir)
        with results_file.open("w", encoding="utf-8") as handle:
            write_report(lines, handle)
    except MalformedInput as exc:
        logger.debug("Malformed input.", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except OSError:
        logger.debug("Cannot open input or output file.", exc_info=True)
        print(
            "Cannot open at least 1 of these files:\n\t'{0}'\n\t'{1}'\n\t'{2}'".format(*files),
            file=sys.stderr,
        )
        return 1

    if not args.no_echo:
        for line in lines:
            print(line)
    logger.info("Wrote %d flights to %s.", len(requests), results_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
