import unittest

import numpy as np

from wiseways.analysis.similarity import cosine_similarity, semantic_similarity, stable_hash, structural_embed


class TestSemanticSimilarity(unittest.TestCase):
    def test_self_similarity_is_one(self):
        t = "How can we improve team collaboration?"
        self.assertAlmostEqual(semantic_similarity(t, t), 1.0)

    def test_disjoint_terms_score_zero(self):
        t = "How can we improve team collaboration?"
        u = "Holiday vacation planning"
        self.assertEqual(semantic_similarity(t, u), 0.0)
        self.assertGreater(semantic_similarity(t, t), semantic_similarity(t, u))

    def test_no_terms_scores_zero(self):
        self.assertEqual(semantic_similarity("ok", "ok"), 0.0)
        self.assertEqual(semantic_similarity("", "improve team"), 0.0)

    def test_partial_overlap(self):
        # {improve:3, team:2.5, collaboration:2.5} vs the same + communication:2.5
        sim = semantic_similarity(
            "How can we improve team collaboration?",
            "How can we improve team collaboration and communication?",
        )
        self.assertAlmostEqual(sim, 21.5 / ((21.5 ** 0.5) * (27.75 ** 0.5)))


class TestStructuralEmbed(unittest.TestCase):
    def test_fixed_length_and_counts(self):
        vec = structural_embed("the cat and the dog")
        self.assertEqual(vec.shape, (100,))
        self.assertEqual(vec.sum(), 5)
        self.assertGreaterEqual(vec[abs(stable_hash("the")) % 100], 2)

    def test_custom_dimension(self):
        self.assertEqual(structural_embed("a b c", dim=16).shape, (16,))

    def test_empty_text(self):
        self.assertEqual(structural_embed("").sum(), 0)

    def test_stable_hash(self):
        self.assertEqual(stable_hash(""), 0)
        self.assertEqual(stable_hash("a"), 97)
        self.assertEqual(stable_hash("ab"), 97 * 31 + 98)
        # wraps to signed 32-bit instead of growing without bound
        h = stable_hash("collaboration" * 10)
        self.assertGreaterEqual(h, -(2**31))
        self.assertLess(h, 2**31)


class TestCosineSimilarity(unittest.TestCase):
    def test_symmetric(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            a = rng.integers(0, 4, size=100)
            b = rng.integers(0, 4, size=100)
            self.assertEqual(cosine_similarity(a, b), cosine_similarity(b, a))

    def test_parallel_vectors(self):
        self.assertAlmostEqual(cosine_similarity([1, 2, 3], [2, 4, 6]), 1.0)

    def test_degenerate_inputs(self):
        self.assertEqual(cosine_similarity([], [1, 2]), 0.0)
        self.assertEqual(cosine_similarity(None, [1, 2]), 0.0)
        self.assertEqual(cosine_similarity([0, 0], [1, 2]), 0.0)

    def test_length_mismatch_pads_with_zero(self):
        self.assertAlmostEqual(cosine_similarity([1, 0], [1]), 1.0)
        self.assertAlmostEqual(cosine_similarity([1, 1], [1]), 1 / np.sqrt(2))


if __name__ == "__main__":
    unittest.main()
