import logging
import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
from uuid import uuid4

from sentiment_dashboard.core.config import Settings
from sentiment_dashboard.schemas.analysis_result import (
    AnalysisSummary,
    Sentiment,
    SentimentAnalysis,
    SentimentDistribution,
    SentimentResult,
    SentimentScores,
)
from sentiment_dashboard.services.lexicon import DEFAULT_LEXICON, Lexicon

logger = logging.getLogger(__name__)

# Draws a confidence inside [low, high].
ConfidenceSource = Callable[[float, float], float]

MAX_KEYWORDS = 8
MAX_EXTRA_KEYWORDS = 5
MAX_CONFIDENCE = 0.95
INTENSIFIER_WEIGHT = 1.5
NEGATION_WINDOW = 2

NO_SIGNAL_BAND = (0.60, 0.80)
BALANCED_BAND = (0.65, 0.80)
NO_SIGNAL_SCORES = SentimentScores(positive=0.33, negative=0.33, neutral=0.34)

# Apostrophes and hyphens survive inside words so "doesn't" and
# "budget-friendly" can still match the lexicon.
_PUNCT_RE = re.compile(r"[^\w\s'-]")
_QUOTE_CHARS = str.maketrans({"’": "'", "‘": "'"})

_TONE = {
    Sentiment.POSITIVE: "The text expresses favorable opinions, satisfaction, or positive emotions.",
    Sentiment.NEGATIVE: "The text contains criticism, dissatisfaction, or negative emotions.",
    Sentiment.NEUTRAL: "The text maintains a neutral tone without strong emotional indicators.",
}


def midpoint_confidence(low: float, high: float) -> float:
    return (low + high) / 2


def seeded_jitter(seed: Optional[int] = None) -> ConfidenceSource:
    """Uniform draw inside the band; reproducible when a seed is given."""
    rng = random.Random(seed)

    def draw(low: float, high: float) -> float:
        return min(high, max(low, rng.uniform(low, high)))

    return draw


def tokenize(text: str) -> List[str]:
    cleaned = _PUNCT_RE.sub(" ", text.lower().translate(_QUOTE_CHARS))
    tokens = (token.strip("'-") for token in cleaned.split())
    return [token for token in tokens if token]


@dataclass(frozen=True)
class TextClassification:
    """Classifier output for one text, before an id and timestamp are attached."""

    sentiment: Sentiment
    confidence: float
    scores: SentimentScores
    keywords: List[str]
    explanation: str
    positive_score: float = 0.0
    negative_score: float = 0.0


@dataclass(frozen=True)
class LexiconClassifier:
    """
    Word-polarity sentiment classifier.

    Holds an immutable lexicon and the source used for the two banded
    confidence cases. Construct once and pass it to whoever needs it.
    """

    lexicon: Lexicon = DEFAULT_LEXICON
    confidence_source: ConfidenceSource = field(default=midpoint_confidence)

    @classmethod
    def from_settings(cls, settings: Settings) -> "LexiconClassifier":
        if settings.confidence_jitter:
            return cls(confidence_source=seeded_jitter(settings.confidence_jitter_seed))
        return cls()

    def classify(self, text: str) -> TextClassification:
        words = tokenize(text)
        positive_score, negative_score, sentiment_words = self._score(words)
        keywords = self._keywords(words, sentiment_words)

        if positive_score + negative_score == 0:
            low, high = NO_SIGNAL_BAND
            sentiment = Sentiment.NEUTRAL
            confidence = self.confidence_source(low, high)
            scores = NO_SIGNAL_SCORES
        else:
            sentiment, confidence = self._decide(positive_score, negative_score)
            scores = score_distribution(sentiment, confidence)

        reason = analysis_reason(positive_score, negative_score, sentiment_words)
        return TextClassification(
            sentiment=sentiment,
            confidence=confidence,
            scores=scores,
            keywords=keywords,
            explanation=explain(sentiment, keywords, reason),
            positive_score=positive_score,
            negative_score=negative_score,
        )

    def classify_texts(self, texts: Sequence[str]) -> List[SentimentResult]:
        """Classify each text independently; output order matches input order."""
        batch = uuid4().hex[:12]
        results: List[SentimentResult] = []
        for index, text in enumerate(texts):
            c = self.classify(text)
            results.append(
                SentimentResult(
                    id=f"analysis-{batch}-{index}",
                    text=text,
                    sentiment=c.sentiment,
                    confidence=c.confidence,
                    scores=c.scores,
                    keywords=c.keywords,
                    timestamp=datetime.now(timezone.utc),
                    explanation=c.explanation,
                )
            )
        return results

    def _score(self, words: List[str]) -> Tuple[float, float, List[str]]:
        positive_score = 0.0
        negative_score = 0.0
        sentiment_words: List[str] = []

        for i, word in enumerate(words):
            polarity = self.lexicon.polarity(word)
            if polarity == 0:
                continue

            window = words[max(0, i - NEGATION_WINDOW):i]
            negated = any(w in self.lexicon.negators for w in window)

            score = float(polarity)
            if i > 0 and words[i - 1] in self.lexicon.intensifiers:
                score *= INTENSIFIER_WEIGHT
            if negated:
                score = -score

            if score > 0:
                positive_score += score
            else:
                negative_score += -score
            sentiment_words.append(word)

        return positive_score, negative_score, sentiment_words

    def _keywords(self, words: List[str], sentiment_words: List[str]) -> List[str]:
        found = set(sentiment_words)
        extra = [
            w for w in words
            if len(w) > 3
            and w not in self.lexicon.stop_words
            and w not in found
            and not self.lexicon.is_modifier(w)
        ][:MAX_EXTRA_KEYWORDS]
        return list(dict.fromkeys(sentiment_words + extra))[:MAX_KEYWORDS]

    def _decide(self, positive_score: float, negative_score: float) -> Tuple[Sentiment, float]:
        positive_ratio = positive_score / (positive_score + negative_score)
        negative_ratio = 1 - positive_ratio

        if positive_ratio > 0.6:
            return Sentiment.POSITIVE, min(MAX_CONFIDENCE, 0.7 + positive_ratio * 0.25)
        if negative_ratio > 0.6:
            return Sentiment.NEGATIVE, min(MAX_CONFIDENCE, 0.7 + negative_ratio * 0.25)
        if abs(positive_ratio - negative_ratio) < 0.2:
            low, high = BALANCED_BAND
            return Sentiment.NEUTRAL, self.confidence_source(low, high)
        if positive_ratio > negative_ratio:
            return Sentiment.POSITIVE, 0.6 + (positive_ratio - negative_ratio) * 0.3
        return Sentiment.NEGATIVE, 0.6 + (negative_ratio - positive_ratio) * 0.3


def score_distribution(sentiment: Sentiment, confidence: float) -> SentimentScores:
    """
    Winner takes the confidence. The remainder goes 20/80 to the opposite
    class and neutral, or 40/40 to positive and negative for a neutral winner.
    """
    remainder = 1 - confidence
    if sentiment is Sentiment.POSITIVE:
        return SentimentScores(positive=confidence, negative=remainder * 0.2, neutral=remainder * 0.8)
    if sentiment is Sentiment.NEGATIVE:
        return SentimentScores(positive=remainder * 0.2, negative=confidence, neutral=remainder * 0.8)
    return SentimentScores(positive=remainder * 0.4, negative=remainder * 0.4, neutral=confidence)


def analysis_reason(positive_score: float, negative_score: float, sentiment_words: List[str]) -> str:
    if positive_score > negative_score:
        return f"Strong positive indicators detected ({', '.join(sentiment_words)})"
    if negative_score > positive_score:
        return f"Strong negative indicators detected ({', '.join(sentiment_words)})"
    return "Balanced or minimal sentiment indicators"


def explain(sentiment: Sentiment, keywords: List[str], reason: str) -> str:
    if keywords:
        key_terms = 'Key terms: "' + '", "'.join(keywords[:3]) + '"'
    else:
        key_terms = "Limited key terms found"
    return f"{key_terms}. {reason}. {_TONE[sentiment]}"


def summarize(results: Sequence[SentimentResult]) -> AnalysisSummary:
    distribution = SentimentDistribution()
    for r in results:
        if r.sentiment is Sentiment.POSITIVE:
            distribution.positive += 1
        elif r.sentiment is Sentiment.NEGATIVE:
            distribution.negative += 1
        else:
            distribution.neutral += 1
    total = len(results)
    average = sum(r.confidence for r in results) / total if total else 0.0
    return AnalysisSummary(
        total_texts=total,
        average_confidence=average,
        sentiment_distribution=distribution,
    )


def analyze_texts(texts: Iterable[str], classifier: LexiconClassifier) -> SentimentAnalysis:
    """Drop blank texts, classify the rest and attach the batch summary."""
    valid = [t for t in texts if t and t.strip()]
    results = classifier.classify_texts(valid)
    summary = summarize(results)
    logger.info(
        f"Analyzed {summary.total_texts} texts: "
        f"{summary.sentiment_distribution.positive} positive, "
        f"{summary.sentiment_distribution.negative} negative, "
        f"{summary.sentiment_distribution.neutral} neutral"
    )
    return SentimentAnalysis(results=results, summary=summary)


def limit_fragments(fragments: List[str], limit: int = 100) -> Tuple[List[str], Optional[str]]:
    """Keep the first `limit` fragments; return a warning when some were cut."""
    if len(fragments) <= limit:
        return fragments, None
    warning = f"File contained {len(fragments)} texts. Showing first {limit} for performance."
    return fragments[:limit], warning
