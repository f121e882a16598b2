"""
Unit tests for competency/skill label similarity.
"""

import unittest

from screening.similarity import similarity, normalize_label


class TestSimilarity(unittest.TestCase):
    """Test the three similarity rules and their priority."""

    def test_exact_match_after_normalization(self):
        self.assertEqual(similarity("Python", "  python "), 1.0)
        self.assertEqual(normalize_label("  SQL "), "sql")

    def test_containment(self):
        self.assertEqual(similarity("React", "React Native"), 0.85)
        self.assertEqual(similarity("React Native", "React"), 0.85)

    def test_edit_distance_fallback(self):
        # Expected: kitten -> sitting is 3 edits over 7 characters
        self.assertAlmostEqual(similarity("kitten", "sitting"), 1 - 3 / 7)
        # Expected: flaw -> lawn is 2 edits over 4 characters
        self.assertAlmostEqual(similarity("flaw", "lawn"), 0.5)

    def test_dissimilar_labels_fall_below_threshold(self):
        self.assertLess(similarity("Kubernetes", "Docker"), 0.5)

    def test_bounds(self):
        pairs = [("a", "xyz"), ("Go", "Kubernetes"), ("", "python"), ("", ""), ("C++", "c++")]
        for a, b in pairs:
            score = similarity(a, b)
            self.assertGreaterEqual(score, 0.0, (a, b))
            self.assertLessEqual(score, 1.0, (a, b))
        self.assertEqual(similarity("a", "xyz"), 0.0)

    def test_empty_strings(self):
        """An empty label is contained in every label."""
        self.assertEqual(similarity("", "python"), 0.85)
        self.assertEqual(similarity("python", "   "), 0.85)
        self.assertEqual(similarity("   ", ""), 1.0)

    def test_symmetry(self):
        pairs = [
            ("Kubernetes", "Docker"),
            ("Leadership", "Mentoring"),
            ("PostgreSQL", "MySQL"),
            ("kitten", "sitting"),
        ]
        for a, b in pairs:
            self.assertEqual(similarity(a, b), similarity(b, a), (a, b))

    def test_determinism(self):
        self.assertEqual(similarity("TypeScript", "JavaScript"), similarity("TypeScript", "JavaScript"))


if __name__ == "__main__":
    unittest.main()
