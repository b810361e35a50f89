"""Module turning per-sentence judgments into a document-level verdict."""

import math
from collections import Counter
from collections.abc import Sequence
from enum import Enum

from humanly.configuration import AggregationPolicy, AggregationStrategy, config
from humanly.data_models import (
    Highlight,
    Number,
    OverallScore,
    SentenceJudgment,
    Verdict,
)


class Bucket(str, Enum):
    """Coarse class of a sentence by its AI score."""

    AI_HEAVY = "ai_heavy"
    MIXED = "mixed"
    HUMAN = "human"


_HIGHLIGHTS = {
    Bucket.AI_HEAVY: Highlight.HIGH,
    Bucket.MIXED: Highlight.MEDIUM,
    Bucket.HUMAN: Highlight.LOW,
}


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.

    The built-in `round()` rounds halves to even, so 92.5 would become 92.

    Args:
        value (float): Value to be rounded.

    Returns:
        int: The rounded value.
    """
    return math.floor(value + 0.5)


def bucket_of(ai: Number, policy: AggregationPolicy = config.aggregation) -> Bucket:
    """
    Classify a sentence into a bucket by its AI score.

    Args:
        ai (Number): AI score of the sentence in [0, 100].
        policy (AggregationPolicy, optional): Thresholds of the buckets.
            Defaults to the value from the configuration.

    Returns:
        Bucket: The bucket of the sentence.
    """
    if ai >= policy.ai_heavy_threshold:
        return Bucket.AI_HEAVY
    if ai >= policy.mixed_threshold:
        return Bucket.MIXED
    return Bucket.HUMAN


def highlight_of(
    ai: Number, policy: AggregationPolicy = config.aggregation
) -> Highlight:
    """Get the highlight level of a sentence with the given AI score."""
    return _HIGHLIGHTS[bucket_of(ai, policy)]


def verdict_of(
    ai_probability: int, policy: AggregationPolicy = config.aggregation
) -> Verdict:
    """
    Label a document-level AI probability.

    Args:
        ai_probability (int): AI probability in [0, 100].
        policy (AggregationPolicy, optional): Verdict thresholds.
            Defaults to the value from the configuration.

    Returns:
        Verdict: The verdict.
    """
    if ai_probability >= policy.likely_ai_threshold:
        return Verdict.LIKELY_AI
    if ai_probability >= policy.possibly_ai_threshold:
        return Verdict.POSSIBLY_AI
    return Verdict.LIKELY_HUMAN


def _bucketed_probability(
    judgments: Sequence[SentenceJudgment], policy: AggregationPolicy
) -> int:
    counts = Counter(bucket_of(judgment.ai, policy) for judgment in judgments)
    # Avoid division by zero for texts without any judged sentence.
    total = max(1, len(judgments))
    ai_heavy_ratio = counts[Bucket.AI_HEAVY] / total
    human_ratio = counts[Bucket.HUMAN] / total

    # Mostly human sentences: suppress false positives.
    if human_ratio >= policy.human_dominance_ratio:
        return min(policy.human_dominance_cap, round_half_up(ai_heavy_ratio * 10))

    # Mostly AI-heavy sentences: escalate.
    if ai_heavy_ratio >= policy.ai_dominance_ratio:
        return min(policy.ai_dominance_cap, round_half_up(70 + ai_heavy_ratio * 30))

    weighted = (
        counts[Bucket.AI_HEAVY] * policy.ai_heavy_weight
        + counts[Bucket.MIXED] * policy.mixed_weight
        + counts[Bucket.HUMAN] * policy.human_weight
    )
    return round_half_up(weighted / total)


def _mean_probability(judgments: Sequence[SentenceJudgment]) -> int:
    if not judgments:
        return 0
    return round_half_up(sum(judgment.ai for judgment in judgments) / len(judgments))


def aggregate(
    judgments: Sequence[SentenceJudgment],
    policy: AggregationPolicy = config.aggregation,
    strategy: AggregationStrategy = config.aggregation_strategy,
) -> OverallScore:
    """
    Compute the overall AI probability and verdict of a document.

    Args:
        judgments (Sequence[SentenceJudgment]): Judgments of the document's
            sentences in any order.
        policy (AggregationPolicy, optional): Thresholds and weights.
            Defaults to the value from the configuration.
        strategy (AggregationStrategy, optional): Either bucketed counts or
            a plain mean of AI scores. Defaults to the value from the configuration.

    Returns:
        OverallScore: The overall score of the document.
    """
    if strategy == AggregationStrategy.MEAN:
        ai_probability = _mean_probability(judgments)
    else:
        ai_probability = _bucketed_probability(judgments, policy)

    ai_probability = min(100, max(0, ai_probability))
    return OverallScore(
        ai_probability=ai_probability,
        human_probability=100 - ai_probability,
        verdict=verdict_of(ai_probability, policy),
    )


def trusted_overall(policy: AggregationPolicy = config.aggregation) -> OverallScore:
    """Get the overall score reported for texts vouched for by the caller."""
    return OverallScore(
        ai_probability=policy.trusted_ai_probability,
        human_probability=100 - policy.trusted_ai_probability,
        verdict=Verdict.VERIFIED_HUMAN,
    )
