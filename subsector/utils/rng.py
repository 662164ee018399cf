"""Seedable dice roller for deterministic subsector generation."""

import random


class DiceRNG:
    """Wrapper around Python's random.Random for deterministic dice rolls.

    All randomness in generation should go through this class to ensure
    that the same seed and the same sequence of calls reproduce the same
    subsector. Instances are not thread-safe; each generation pass owns one.
    """

    def __init__(self, seed: int):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def roll(self, n: int, sides: int) -> int:
        """Roll n dice with the given number of sides and sum them.

        Args:
            n: Number of dice (must be >= 1)
            sides: Sides per die (must be >= 1)

        Returns:
            Sum of n independent uniform values in [1, sides]
        """
        if n < 1 or sides < 1:
            raise ValueError(f"Invalid dice: {n}d{sides}")
        return sum(self.rng.randint(1, sides) for _ in range(n))

    def roll_2d6_with_dm(self, dm: int, lower: int, upper: int) -> int:
        """Roll 2d6, add a dice modifier and clamp the result.

        Out-of-range sums are clamped rather than re-rolled so the stream
        stays aligned with the seed.

        Args:
            dm: Dice modifier added to the roll
            lower: Lowest allowed result (inclusive)
            upper: Highest allowed result (inclusive)

        Returns:
            clamp(2d6 + dm, lower, upper)
        """
        return clamp(self.roll(2, 6) + dm, lower, upper)

    def randint(self, a: int, b: int) -> int:
        """Return random integer in range [a, b], inclusive."""
        return self.rng.randint(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence."""
        return self.rng.choice(seq)

    def spawn(self) -> "DiceRNG":
        """Create an independent child stream.

        The child is seeded from a single draw of this stream, so a
        regeneration consumes exactly one value here no matter how many
        dice it rolls itself.

        Returns:
            New DiceRNG with an uncorrelated sequence
        """
        return DiceRNG(self.rng.getrandbits(64))

    def get_state(self):
        """Get the current state of the RNG for serialization.

        Returns:
            RNG state tuple that can be used with set_state
        """
        return self.rng.getstate()

    def set_state(self, state):
        """Set the state of the RNG for deserialization.

        Args:
            state: RNG state tuple from get_state
        """
        self.rng.setstate(state)


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))
