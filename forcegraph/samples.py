import networkx as nx

# Demo dataset shown by the knowledge graph view when nothing is loaded.
SAMPLE_NODES = [
    {"id": "1", "name": "Machine Learning", "type": "concept", "size": 20},
    {"id": "2", "name": "John Doe", "type": "person", "size": 15},
    {"id": "3", "name": "AI Project Alpha", "type": "project", "size": 18},
    {"id": "4", "name": "Research Paper", "type": "document", "size": 12},
    {"id": "5", "name": "Team Meeting", "type": "event", "size": 10},
    {"id": "6", "name": "Deep Learning", "type": "concept", "size": 16},
    {"id": "7", "name": "Jane Smith", "type": "person", "size": 14},
    {"id": "8", "name": "Neural Networks", "type": "concept", "size": 17},
    {"id": "9", "name": "Code Review", "type": "event", "size": 11},
    {"id": "10", "name": "Documentation", "type": "document", "size": 13},
]

SAMPLE_LINKS = [
    {"source": "1", "target": "6", "strength": 0.9, "type": "contains"},
    {"source": "1", "target": "8", "strength": 0.8, "type": "contains"},
    {"source": "2", "target": "3", "strength": 0.7, "type": "collaborates"},
    {"source": "3", "target": "4", "strength": 0.6, "type": "contains"},
    {"source": "5", "target": "2", "strength": 0.5, "type": "mentions"},
    {"source": "6", "target": "8", "strength": 0.8, "type": "contains"},
    {"source": "7", "target": "3", "strength": 0.6, "type": "collaborates"},
    {"source": "9", "target": "10", "strength": 0.4, "type": "precedes"},
    {"source": "4", "target": "8", "strength": 0.7, "type": "mentions"},
    {"source": "2", "target": "7", "strength": 0.5, "type": "collaborates"},
]


def sample_graph():
    """The demo dataset as a networkx DiGraph."""
    graph = nx.DiGraph()
    for record in SAMPLE_NODES:
        attrs = {k: v for k, v in record.items() if k != "id"}
        graph.add_node(record["id"], **attrs)
    for record in SAMPLE_LINKS:
        attrs = {k: v for k, v in record.items() if k not in ("source", "target")}
        graph.add_edge(record["source"], record["target"], **attrs)
    return graph
