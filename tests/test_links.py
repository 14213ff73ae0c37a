import unittest
from collections import Counter

from wiseways.analysis.causal import PROBLEM_SOLUTION
from wiseways.analysis.terms import extract_key_terms
from wiseways.graph.links import generate_links, score_pair
from wiseways.graph.models import pair_key
from wiseways.graph.store import GraphStore

SHORT_WORDS = [
    "ok", "go", "hi", "yes", "no", "up", "cat", "dog", "red", "sun",
    "sky", "sea", "tea", "pen", "cup", "box", "hat", "map", "key", "jam",
]


def make_nodes(*texts):
    store = GraphStore()
    return [store.make_node(t) for t in texts]


class TestGenerateLinks(unittest.TestCase):
    def test_fewer_than_two_nodes(self):
        self.assertEqual(generate_links([]), [])
        self.assertEqual(generate_links(make_nodes("How can we improve team collaboration?")), [])

    def test_unrelated_questions_still_link_on_shared_labels(self):
        a, b = make_nodes("How can we improve team collaboration?", "What training programs build skills?")
        links = generate_links([a, b], threshold=0.2)
        self.assertEqual(len(links), 1)
        link = links[0]
        self.assertEqual((link.source, link.target), (a.id, b.id))
        self.assertIsNone(link.relation_type)
        self.assertGreaterEqual(link.weight, 0.2)
        self.assertEqual(link.semantic_score, score_pair(a, b).semantic)
        self.assertTrue(link.reason.endswith("% semantic similarity"))

    def test_problem_solution_link(self):
        a, b = make_nodes("What problem are we facing with retention?", "How do we solve the retention issue?")
        s = score_pair(a, b)
        self.assertAlmostEqual(s.causal.score, 0.3)

        links = generate_links([a, b], threshold=0.2)
        self.assertEqual(len(links), 1)
        self.assertEqual(links[0].relation_type, PROBLEM_SOLUTION)
        self.assertGreater(links[0].semantic_score, 0.0)
        self.assertGreaterEqual(links[0].weight, 0.3)
        self.assertIn("problem-solution relationship", links[0].reason)

    def test_contentless_questions_never_link(self):
        nodes = make_nodes(*SHORT_WORDS)
        for n in nodes:
            self.assertEqual(n.need, "UNKNOWN")
            self.assertEqual(n.dimension, "UNKNOWN")
            self.assertEqual(n.pipeline_score, 0.5)
        self.assertEqual(generate_links(nodes, threshold=0.2), [])

    def test_question_without_terms_links_to_one_with_terms(self):
        a, b = make_nodes("What is the problem here?", "How do we fix it?")
        self.assertEqual(extract_key_terms(b.text), {})

        links = generate_links([a, b], threshold=0.2)
        self.assertEqual(len(links), 1)
        self.assertEqual((links[0].source, links[0].target), (a.id, b.id))
        self.assertEqual(links[0].relation_type, PROBLEM_SOLUTION)
        self.assertEqual(links[0].semantic_score, 0.0)
        self.assertGreaterEqual(links[0].weight, 0.5)

    def test_threshold_filters(self):
        nodes = make_nodes("How can we improve team collaboration?", "What training programs build skills?")
        self.assertEqual(generate_links(nodes, threshold=2.0), [])

    def test_max_per_node_keeps_heaviest(self):
        a, b, c = make_nodes(
            "Improve team collaboration",
            "Holiday vacation fun",
            "Improve team collaboration culture",
        )
        links = generate_links([a, b, c], threshold=0.2, max_per_node=1)
        from_a = [l for l in links if l.source == a.id]
        self.assertEqual(len(from_a), 1)
        self.assertEqual(from_a[0].target, c.id)

    def test_out_degree_and_unique_pairs(self):
        words = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot"]
        nodes = make_nodes(*[f"Improve team collaboration {w}" for w in words])
        links = generate_links(nodes, threshold=0.2, max_per_node=2)

        out_degree = Counter(l.source for l in links)
        self.assertTrue(all(d <= 2 for d in out_degree.values()))
        self.assertEqual(out_degree[nodes[0].id], 2)

        keys = [pair_key(l.source, l.target) for l in links]
        self.assertEqual(len(keys), len(set(keys)))
        self.assertTrue(all(l.source != l.target for l in links))

    def test_deterministic(self):
        nodes = make_nodes(
            "How can we improve team collaboration and communication?",
            "What recognition programs motivate our team?",
            "How do we protect sensitive customer data?",
            "Comment améliorer la communication entre départements?",
        )
        first = [(l.source, l.target, l.weight) for l in generate_links(nodes)]
        second = [(l.source, l.target, l.weight) for l in generate_links(nodes)]
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
