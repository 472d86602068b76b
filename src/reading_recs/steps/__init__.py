"""Recommendation pipeline steps, in execution order."""

from reading_recs.steps.step1_expansion import expand_queries
from reading_recs.steps.step2_fetch import BranchOutcome, FetchResult, fetch_all, fetch_with_timeout
from reading_recs.steps.step3_dedup import deduplicate
from reading_recs.steps.step4_enrichment import enrich_candidate, enrich_candidates
from reading_recs.steps.step5_filter import filter_candidate, filter_candidates
from reading_recs.steps.step6_ranking import rank_candidates, score_candidate, slice_results

__all__ = [
    "expand_queries",
    "BranchOutcome",
    "FetchResult",
    "fetch_all",
    "fetch_with_timeout",
    "deduplicate",
    "enrich_candidate",
    "enrich_candidates",
    "filter_candidate",
    "filter_candidates",
    "rank_candidates",
    "score_candidate",
    "slice_results",
]
