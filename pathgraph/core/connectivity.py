"""Connected components of a materialized Graph.

Depth-first traversal driven by an explicit stack, so traversal depth is not
limited by the interpreter's recursion limit however long the graph's paths.
"""

from pathgraph.model.graph import Graph


def connected_components(graph: Graph) -> list[list[str]]:
    """Partition the graph's vertices into connected components.

    Components are discovered by scanning vertices in list order; within a
    component, ids appear in depth-first preorder. Every vertex appears in
    exactly one component, isolated vertices forming their own.

    Returns:
        List of components, each a list of vertex ids.
    """
    visited: set[str] = set()
    components: list[list[str]] = []

    for vertex in graph.vertices:
        if vertex.id in visited:
            continue

        component: list[str] = []
        stack = [vertex.id]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            component.append(current)
            # Reversed so the first neighbor is explored first
            for neighbor in reversed(graph.adjacency[current]):
                if neighbor.to not in visited and graph.has_vertex(neighbor.to):
                    stack.append(neighbor.to)

        components.append(component)

    return components
