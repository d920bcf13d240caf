import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.taxonomy import canonical_skill  # noqa: E402
from resumefit.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_name(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical = taxonomy.normalize_skill("  K8s ")
        self.assertEqual(normalized, "k8s")
        self.assertEqual(canonical, "Kubernetes")

    def test_canonical_name_spelling(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.canonical_name("golang"), "Go")
        self.assertEqual(taxonomy.canonical_name("Node"), "Node.js")

    def test_unknown_skill_keeps_trimmed_input(self):
        taxonomy = LocalTaxonomy()
        self.assertEqual(taxonomy.normalize_skill("Basket  Weaving"), ("basket weaving", None))
        self.assertEqual(taxonomy.canonical_name("  Basket Weaving "), "Basket Weaving")

    def test_default_provider_helper(self):
        self.assertEqual(canonical_skill("K8s"), "Kubernetes")
        self.assertEqual(canonical_skill(" Pottery "), "Pottery")


if __name__ == "__main__":
    unittest.main()
