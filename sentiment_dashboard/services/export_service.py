"""
Export an analysis as CSV, pretty-printed JSON, or a plain-text report.
"""
from datetime import datetime, timezone
from typing import Optional

from sentiment_dashboard.schemas.analysis_result import SentimentAnalysis

CSV_HEADERS = [
    "Text", "Sentiment", "Confidence", "Positive Score",
    "Negative Score", "Neutral Score", "Keywords", "Timestamp",
]

EXPORT_MEDIA_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
    "report": "text/plain",
}

EXPORT_EXTENSIONS = {
    "csv": "csv",
    "json": "json",
    "report": "txt",
}


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def iso_timestamp(ts: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ts.microsecond // 1000:03d}Z"


def _percent(count: int, total: int) -> str:
    return f"{(count / total * 100) if total else 0.0:.1f}%"


def to_csv(analysis: SentimentAnalysis) -> str:
    rows = [",".join(CSV_HEADERS)]
    for r in analysis.results:
        rows.append(",".join([
            _quote(r.text),
            r.sentiment.value,
            f"{r.confidence:.3f}",
            f"{r.scores.positive:.3f}",
            f"{r.scores.negative:.3f}",
            f"{r.scores.neutral:.3f}",
            _quote(", ".join(r.keywords)),
            iso_timestamp(r.timestamp),
        ]))
    return "\n".join(rows)


def to_json(analysis: SentimentAnalysis) -> str:
    return analysis.model_dump_json(indent=2)


def to_report(analysis: SentimentAnalysis, generated_at: Optional[datetime] = None) -> str:
    generated_at = generated_at or datetime.now()
    summary = analysis.summary
    dist = summary.sentiment_distribution
    total = summary.total_texts

    lines = [
        "SENTIMENT ANALYSIS REPORT",
        "========================",
        "",
        f"Analysis Date: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Total Texts Analyzed: {total}",
        f"Average Confidence: {summary.average_confidence * 100:.1f}%",
        "",
        "SENTIMENT DISTRIBUTION:",
        "-----------------------",
        f"Positive: {dist.positive} ({_percent(dist.positive, total)})",
        f"Negative: {dist.negative} ({_percent(dist.negative, total)})",
        f"Neutral: {dist.neutral} ({_percent(dist.neutral, total)})",
        "",
        "DETAILED RESULTS:",
        "-----------------",
    ]
    for index, r in enumerate(analysis.results, start=1):
        lines.extend([
            "",
            f'{index}. Text: "{r.text}"',
            f"   Sentiment: {r.sentiment.value} ({r.confidence * 100:.1f}% confidence)",
            f"   Keywords: {', '.join(r.keywords)}",
            f"   Explanation: {r.explanation}",
        ])
    return "\n".join(lines) + "\n"


EXPORTERS = {
    "csv": to_csv,
    "json": to_json,
    "report": to_report,
}


def export_filename(fmt: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"sentiment_analysis_{now.strftime('%Y%m%d_%H%M%S')}.{EXPORT_EXTENSIONS[fmt]}"
