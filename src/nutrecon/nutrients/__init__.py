"""Nutrient data harmonization stages.

Stages in dependency order: normalizer, merger, filters (surface,
sparsity), summarizer (collapse, summarize), prevalence.
"""

from nutrecon.nutrients.categories import Parameter, Source
from nutrecon.nutrients.normalizer import normalize_source_a, normalize_source_b
from nutrecon.nutrients.merger import merge_sources
from nutrecon.nutrients.filters import surface_filter, sparsity_filter
from nutrecon.nutrients.summarizer import (
    SiteStatistics,
    site_statistics,
    collapse_replicates,
    summarize_sites,
)
from nutrecon.nutrients.prevalence import prevalence_table

__all__ = [
    'Parameter',
    'Source',
    'normalize_source_a',
    'normalize_source_b',
    'merge_sources',
    'surface_filter',
    'sparsity_filter',
    'SiteStatistics',
    'site_statistics',
    'collapse_replicates',
    'summarize_sites',
    'prevalence_table',
]
