"""
Word lists used by the lexicon classifier.

All entries are lower case; lookups are done on lower-cased tokens.
"""
from dataclasses import dataclass
from typing import FrozenSet


POSITIVE_WORDS = frozenset({
    "amazing", "awesome", "excellent", "fantastic", "great", "wonderful", "perfect", "outstanding",
    "brilliant", "superb", "magnificent", "marvelous", "incredible", "spectacular", "phenomenal",
    "love", "like", "enjoy", "appreciate", "adore", "cherish", "treasure", "value",
    "happy", "joy", "pleased", "satisfied", "delighted", "thrilled", "excited", "elated",
    "good", "nice", "fine", "well", "better", "best", "superior", "quality",
    "success", "successful", "achieve", "accomplished", "victory", "win", "triumph",
    "beautiful", "attractive", "gorgeous", "stunning", "elegant", "lovely", "pretty",
    "helpful", "useful", "beneficial", "valuable", "worthwhile", "effective", "efficient",
    "recommend", "praise", "compliment", "congratulate", "thank", "grateful", "thankful",
    "smooth", "easy", "simple", "convenient", "comfortable", "pleasant", "enjoyable",
    "fast", "quick", "rapid", "speedy", "prompt", "timely",
    "reliable", "trustworthy", "dependable", "consistent", "stable", "secure",
    "innovative", "creative", "original", "unique", "special", "exceptional",
    "affordable", "reasonable", "fair", "cheap", "economical", "budget-friendly",
})

NEGATIVE_WORDS = frozenset({
    "awful", "terrible", "horrible", "disgusting", "pathetic", "useless", "worthless",
    "bad", "poor", "worst", "inferior", "subpar", "mediocre", "disappointing",
    "hate", "dislike", "despise", "loathe", "detest", "abhor", "resent",
    "angry", "mad", "furious", "upset", "annoyed", "irritated", "frustrated",
    "sad", "depressed", "miserable", "unhappy", "gloomy", "devastated", "heartbroken",
    "fail", "failure", "failed", "unsuccessful", "defeat", "lose", "loss",
    "problem", "issue", "trouble", "difficulty", "challenge", "obstacle", "barrier",
    "slow", "sluggish", "delayed", "late", "overdue", "behind", "lagging",
    "expensive", "costly", "overpriced", "unaffordable", "pricey", "steep",
    "broken", "damaged", "defective", "faulty", "malfunctioning", "buggy",
    "confusing", "complicated", "difficult", "hard", "complex", "unclear",
    "rude", "impolite", "disrespectful", "unprofessional", "inappropriate",
    "unreliable", "untrustworthy", "inconsistent", "unstable", "insecure",
    "boring", "dull", "tedious", "monotonous", "uninteresting", "bland",
    "wrong", "incorrect", "false", "inaccurate", "mistaken", "error",
})

INTENSIFIERS = frozenset({
    "very", "extremely", "incredibly", "absolutely", "completely", "totally",
    "really", "quite", "rather", "pretty", "fairly", "somewhat",
    "highly", "deeply", "truly", "genuinely", "seriously", "definitely",
})

NEGATORS = frozenset({
    "not", "no", "never", "nothing", "nobody", "nowhere", "neither",
    "none", "cannot", "can't", "won't", "wouldn't", "shouldn't",
    "don't", "doesn't", "didn't", "isn't", "aren't", "wasn't", "weren't",
})

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does",
    "did", "will", "would", "could", "should", "may", "might", "must", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they", "me", "him",
    "her", "us", "them", "my", "your", "his", "its", "our", "their",
})


@dataclass(frozen=True)
class Lexicon:
    """Immutable bundle of the word sets; build once and share."""

    positive: FrozenSet[str] = POSITIVE_WORDS
    negative: FrozenSet[str] = NEGATIVE_WORDS
    intensifiers: FrozenSet[str] = INTENSIFIERS
    negators: FrozenSet[str] = NEGATORS
    stop_words: FrozenSet[str] = STOP_WORDS

    def polarity(self, word: str) -> int:
        """+1 for a positive word, -1 for a negative word, 0 otherwise."""
        if word in self.positive:
            return 1
        if word in self.negative:
            return -1
        return 0

    def is_modifier(self, word: str) -> bool:
        return word in self.intensifiers or word in self.negators


DEFAULT_LEXICON = Lexicon()
