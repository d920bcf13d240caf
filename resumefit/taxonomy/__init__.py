from functools import lru_cache

from .local_taxonomy import LocalTaxonomy
from .provider import TaxonomyProvider


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> TaxonomyProvider:
    return LocalTaxonomy()


def canonical_skill(raw: str) -> str:
    """Canonical spelling from the bundled synonyms: "k8s" -> "Kubernetes", unknown input trimmed."""
    return get_default_taxonomy_provider().canonical_name(raw)


__all__ = ["TaxonomyProvider", "LocalTaxonomy", "get_default_taxonomy_provider", "canonical_skill"]
