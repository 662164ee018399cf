"""Random world and subsector names built from syllable patterns.

Each name follows one of a fixed set of patterns. A pattern is a sequence of
syllable pools: the first pool gives the opening consonant or vowel, the
middle pools join, and the last pool gives the ending.
"""

from .rng import DiceRNG

CONSONANTS = [
    "b", "c", "d", "f", "g", "h", "i", "j", "k", "l", "m",
    "n", "p", "q", "r", "s", "t", "v", "w", "x", "y", "z",
]
VOWELS = ["a", "e", "o", "u"]
CLUSTERS = [
    "br", "cr", "dr", "fr", "gr", "pr", "str", "tr", "bl", "cl", "fl", "gl", "pl",
    "sl", "sc", "sk", "sm", "sn", "sp", "st", "sw", "ch", "sh", "th", "wh",
]
DIPHTHONGS = [
    "ae", "ai", "ao", "au", "a", "ay", "ea", "ei", "eo", "eu", "e", "ey", "ua", "ue",
    "ui", "uo", "u", "uy", "ia", "ie", "iu", "io", "iy", "oa", "oe", "ou", "oi", "o", "oy",
]
CONSONANT_ENDINGS = [
    "turn", "ter", "nus", "rus", "tania", "hiri", "hines", "gawa", "nides", "carro",
    "rilia", "stea", "lia", "lea", "ria", "nov", "phus", "mia", "nerth", "wei", "ruta",
    "tov", "zuno", "vis", "lara", "nia", "liv", "tera", "gantu", "yama", "tune", "cury",
    "bos", "pra", "thea", "nope", "tis", "clite",
]
VOWEL_ENDINGS = [
    "una", "ion", "iea", "iri", "illes", "ides", "agua", "olla", "inda", "eshan", "oria",
    "ilia", "erth", "arth", "orth", "oth", "illon", "ichi", "ov", "arvis", "ara", "ars",
    "yke", "yria", "onoe", "ippe", "osie", "one", "ore", "ade", "adus", "urn", "ypso",
    "ora", "iuq", "orix", "apus", "eon", "eron", "ao", "omia",
]

NAME_PATTERNS = [
    (CONSONANTS, VOWELS, CONSONANT_ENDINGS),
    (VOWELS, CLUSTERS, VOWEL_ENDINGS),
    (CLUSTERS, DIPHTHONGS, CONSONANT_ENDINGS),
    (DIPHTHONGS, CLUSTERS, VOWEL_ENDINGS),
    (CLUSTERS, DIPHTHONGS, VOWELS, CONSONANT_ENDINGS),
    (VOWELS, CONSONANTS, CLUSTERS, VOWEL_ENDINGS),
    (DIPHTHONGS, CLUSTERS, CONSONANTS, VOWEL_ENDINGS),
    (CLUSTERS, DIPHTHONGS, CONSONANTS, DIPHTHONGS, CONSONANT_ENDINGS),
    (DIPHTHONGS, CONSONANTS, DIPHTHONGS, CLUSTERS, VOWEL_ENDINGS),
]


def random_name(rng: DiceRNG) -> str:
    """Generate a capitalized name from the seeded stream.

    Args:
        rng: Dice roller supplying every choice

    Returns:
        Name such as "Strainides" or "Kotania"

    Examples:
        >>> random_name(DiceRNG(42)) == random_name(DiceRNG(42))
        True
    """
    pattern = rng.choice(NAME_PATTERNS)
    name = "".join(rng.choice(pool) for pool in pattern)
    return name.capitalize()
