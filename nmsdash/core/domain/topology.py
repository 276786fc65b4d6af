"""
Topology graph models.

Vertex ids are only unique within a namespace, so every lookup is keyed by
the ``(namespace, id)`` pair. Edge endpoints that match no vertex refer to
nodes outside the returned graph.
"""

from typing import Iterator, Optional

from pydantic import Field

from nmsdash.core.domain.models import ShapeMismatchError, WireModel


VertexKey = tuple[str, str]


class Vertice(WireModel):
    """Graph vertex as returned by the backend."""

    id: str
    namespace: str
    label: Optional[str] = None
    tooltip_text: Optional[str] = None
    ip_address: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None
    icon_key: Optional[str] = None
    node_id: Optional[str] = None

    @property
    def key(self) -> VertexKey:
        return (self.namespace, self.id)


class EdgeEndpoint(WireModel):
    namespace: str
    id: int

    @property
    def key(self) -> VertexKey:
        return (self.namespace, str(self.id))


class Edge(WireModel):
    source: EdgeEndpoint
    target: EdgeEndpoint

    @property
    def key(self) -> tuple[VertexKey, VertexKey]:
        return (self.source.key, self.target.key)


class GraphNodesResponse(WireModel):
    vertices: list[Vertice] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)


class TopologyGraph:
    """
    Namespace-aware index over a graph response.

    Usage:
        graph = TopologyGraph.from_response(response)
        source, target = graph.resolve_edge(edge)
    """

    def __init__(self, vertices: list[Vertice], edges: list[Edge]):
        self._vertices: dict[VertexKey, Vertice] = {}
        for vertex in vertices:
            if vertex.key in self._vertices:
                raise ShapeMismatchError(
                    "GraphNodesResponse",
                    [{"msg": "duplicate vertex", "key": vertex.key}],
                )
            self._vertices[vertex.key] = vertex
        self._edges = list(edges)

    @classmethod
    def from_response(cls, response: GraphNodesResponse) -> "TopologyGraph":
        return cls(response.vertices, response.edges)

    @property
    def vertices(self) -> list[Vertice]:
        return list(self._vertices.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def vertex(self, namespace: str, vertex_id: str | int) -> Optional[Vertice]:
        return self._vertices.get((namespace, str(vertex_id)))

    def resolve(self, endpoint: EdgeEndpoint) -> Optional[Vertice]:
        """Vertex for an edge endpoint, or None for an external node."""
        return self._vertices.get(endpoint.key)

    def resolve_edge(self, edge: Edge) -> tuple[Optional[Vertice], Optional[Vertice]]:
        return self.resolve(edge.source), self.resolve(edge.target)

    def neighbors(self, vertex: Vertice) -> list[Vertice]:
        """Vertices sharing an edge with ``vertex``, in edge order."""
        found: list[Vertice] = []
        for edge in self._edges:
            if edge.source.key == vertex.key:
                other = self.resolve(edge.target)
            elif edge.target.key == vertex.key:
                other = self.resolve(edge.source)
            else:
                continue
            if other is not None and other not in found:
                found.append(other)
        return found

    def external_endpoints(self) -> Iterator[EdgeEndpoint]:
        """Edge endpoints that match no vertex in this graph."""
        seen: set[VertexKey] = set()
        for edge in self._edges:
            for endpoint in (edge.source, edge.target):
                if endpoint.key not in self._vertices and endpoint.key not in seen:
                    seen.add(endpoint.key)
                    yield endpoint
