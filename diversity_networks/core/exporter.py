"""
Network Exporter

Writes a NetworkResult as:
- JSON      the rendering-layer payload (NetworkResult.to_dict)
- GraphML   via NetworkX; list attributes are joined into strings
- CSV       nodes.csv, edges.csv and clusters.csv via pandas
"""
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

import networkx as nx
import pandas as pd

if TYPE_CHECKING:
    from ..pipeline.models import NetworkResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def to_networkx(result: "NetworkResult", descriptions: Optional[Dict[str, str]] = None) -> nx.Graph:
    """Undirected NetworkX graph with the output attributes on nodes and edges."""
    graph = nx.Graph(
        network_effect=result.network_effect,
        effect_class=result.effect_class.value,
    )
    for node in result.nodes:
        attrs = node.to_dict(descriptions.get(node.id) if descriptions else None)
        attrs.pop("id")
        graph.add_node(node.id, **attrs)
    for edge in result.edges:
        attrs = edge.to_dict()
        source, target = attrs.pop("source"), attrs.pop("target")
        graph.add_edge(source, target, **attrs)
    return graph


def _prepare_path(path: PathLike) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def export_json(result: "NetworkResult", path: PathLike, descriptions: Optional[Dict[str, str]] = None) -> Path:
    output_path = _prepare_path(path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(descriptions), f, indent=2, default=str)
    logger.info(f"Exported network JSON to {output_path}")
    return output_path


def export_graphml(result: "NetworkResult", path: PathLike, descriptions: Optional[Dict[str, str]] = None) -> Path:
    graph = to_networkx(result, descriptions)
    # GraphML attributes must be scalars
    for _, attrs in graph.nodes(data=True):
        attrs["years"] = ",".join(str(y) for y in attrs.get("years", []))
    output_path = _prepare_path(path)
    nx.write_graphml(graph, output_path)
    logger.info(f"Exported network GraphML to {output_path}")
    return output_path


def export_csv(result: "NetworkResult", directory: PathLike) -> Dict[str, Path]:
    """Write one CSV per table into ``directory``; returns table name -> path."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    nodes = pd.DataFrame([n.to_dict() for n in result.nodes])
    if not nodes.empty:
        nodes["years"] = nodes["years"].apply(lambda ys: ",".join(str(y) for y in ys))
    clusters = pd.DataFrame([c.to_dict() for c in result.clusters()])
    if not clusters.empty:
        clusters["codes"] = clusters["codes"].apply(" + ".join)

    tables = {
        "nodes": nodes,
        "edges": pd.DataFrame([e.to_dict() for e in result.edges]),
        "clusters": clusters,
    }
    paths = {}
    for name, frame in tables.items():
        paths[name] = out_dir / f"{name}.csv"
        frame.to_csv(paths[name], index=False)
    logger.info(f"Exported {len(paths)} CSV tables to {out_dir}")
    return paths
