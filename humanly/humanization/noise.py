"""Module adding small human-like irregularities to generated text."""

from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")

SEPARATOR = ". "
MIN_SEGMENTS = 3

FILLERS = (
    "Honestly,",
    "In simple terms,",
    "That’s the thing—",  # noqa: RUF001
    "If you think about it,",
    "In day-to-day use,",
    "",
)

ENDINGS = (
    "",
    " It just works.",
    " Nothing too fancy.",
    " Pretty straightforward.",
    "",
)


class RandomSource(Protocol):
    """Subset of `random.Random` used for noise injection."""

    def choice(self, seq: Sequence[T]) -> T:
        """Pick an element of a non-empty sequence uniformly."""
        ...

    def randrange(self, stop: int) -> int:
        """Pick an integer from [0, stop) uniformly."""
        ...


def inject_human_noise(text: str, rng: RandomSource) -> str:
    """
    Randomly add a filler, drop a comma, and append an ending.

    The result is not reproducible unless `rng` is seeded. Texts with fewer
    than three ". "-separated segments are returned unchanged.

    Args:
        text (str): Rewritten text.
        rng (RandomSource): Source of randomness, e.g. `random.Random`.

    Returns:
        str: Text with the noise injected.
    """
    segments = text.split(SEPARATOR)
    if len(segments) < MIN_SEGMENTS:
        return text

    filler = rng.choice(FILLERS)
    if filler:
        segments[0] = f"{filler} {segments[0]}"

    index = rng.randrange(len(segments))
    segments[index] = segments[index].replace(",", "", 1)

    ending = rng.choice(ENDINGS)
    return SEPARATOR.join(segments) + ending
