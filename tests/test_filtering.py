"""Tests for network filtering."""

from contactcore.network import GraphEdge, GraphNode, filter_network


def node(node_id, name="", company="", job=""):
    return GraphNode(id=node_id, name=name or node_id, company=company, job=job, kind="client")


def edge(source, target, strength):
    return GraphEdge(id=f"{source}-{target}", source=source, target=target, strength=strength)


class TestFilterNetwork:
    """Test suite for filter_network."""

    def setup_method(self):
        self.nodes = [
            node("a", "Alice Walker", "Acme", "Well 7"),
            node("b", "Brian Ortiz", "Acme", "Pad 3"),
            node("c", "Carla Diaz", "Halliburton", "Well 7"),
            node("d", "Dan Reyes", "Baker", "Pad 9"),
        ]
        self.edges = [edge("a", "b", 3.5), edge("a", "c", 2), edge("b", "c", 0.5)]

    def test_default_drops_weak_edges_and_isolated_nodes(self):
        nodes, edges = filter_network(self.nodes, self.edges)

        assert [e.id for e in edges] == ["a-b", "a-c"]
        assert [n.id for n in nodes] == ["a", "b", "c"]

    def test_higher_min_strength(self):
        nodes, edges = filter_network(self.nodes, self.edges, min_strength=3)

        assert [e.id for e in edges] == ["a-b"]
        assert [n.id for n in nodes] == ["a", "b"]

    def test_all_nodes_kept_when_no_edge_survives(self):
        nodes, edges = filter_network(self.nodes, self.edges, min_strength=9)

        assert edges == []
        assert nodes == self.nodes

    def test_search_matches_name_company_or_job(self):
        nodes, _ = filter_network(self.nodes, self.edges, search_query="WELL")
        assert [n.id for n in nodes] == ["a", "c"]

        nodes, _ = filter_network(self.nodes, self.edges, search_query="baker")
        assert [n.id for n in nodes] == ["d"]

        nodes, _ = filter_network(self.nodes, self.edges, search_query="ortiz")
        assert [n.id for n in nodes] == ["b"]

    def test_search_keeps_unconnected_matches(self):
        nodes, edges = filter_network(self.nodes, self.edges, search_query="dan")

        assert [n.id for n in nodes] == ["d"]
        assert len(edges) == 2
