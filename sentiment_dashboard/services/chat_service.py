"""
Scripted response assistant.

Answers questions about the current analysis with canned reply suggestions.
There is no model behind it: replies are chosen by keyword matching on the
user's message.
"""
import re
from typing import List, Sequence

from sentiment_dashboard.schemas.analysis_result import Sentiment, SentimentResult

GREETING = (
    "Hi! I'm your sentiment analysis assistant. I can help you craft appropriate "
    "responses based on the sentiment analysis results. Try asking me about "
    "specific texts or how to respond to different sentiments!"
)

SUGGESTED_QUESTIONS = [
    "How should I respond to text 1?",
    "Give me a summary of all sentiments",
    "What about the negative feedback?",
    "How to respond to positive comments?",
]

HELP_REPLY = (
    "I can help you with response suggestions! Try asking me:\n"
    "• 'How should I respond to text 1?'\n"
    "• 'What about the negative feedback?'\n"
    "• 'Give me a summary of all sentiments'\n"
    "• 'How to respond to positive comments?'"
)

_TEXT_NUMBER_RE = re.compile(r"text\s*(\d+)")


def _count(results: Sequence[SentimentResult], sentiment: Sentiment) -> int:
    return sum(1 for r in results if r.sentiment is sentiment)


def reply(message: str, results: Sequence[SentimentResult]) -> str:
    lower = message.lower()

    match = _TEXT_NUMBER_RE.search(lower)
    if match:
        index = int(match.group(1)) - 1
        if 0 <= index < len(results):
            return respond_to_result(results[index])

    if "positive" in lower or "good" in lower:
        count = _count(results, Sentiment.POSITIVE)
        if count:
            return (
                f"Great! I found {count} positive sentiment(s). For positive feedback, "
                'consider responses like: "Thank you for your positive feedback!", '
                '"We\'re delighted to hear this!", or "Your satisfaction means everything to us!"'
            )

    if "negative" in lower or "bad" in lower:
        count = _count(results, Sentiment.NEGATIVE)
        if count:
            return (
                f"I found {count} negative sentiment(s). For negative feedback, try: "
                '"We sincerely apologize for your experience", "Thank you for bringing this '
                'to our attention", or "We\'re committed to making this right for you."'
            )

    if "neutral" in lower:
        count = _count(results, Sentiment.NEUTRAL)
        if count:
            return (
                f"There are {count} neutral sentiment(s). For neutral feedback, consider: "
                '"Thank you for your feedback", "We appreciate you taking the time to share", '
                'or "Is there anything specific we can help you with?"'
            )

    if "how to respond" in lower or "what to say" in lower:
        return response_strategy(results)

    if "summary" in lower or "overview" in lower:
        return summary_reply(results)

    return HELP_REPLY


def respond_to_result(result: SentimentResult) -> str:
    text = result.text if len(result.text) <= 100 else result.text[:100] + "..."
    lines: List[str] = [
        f'For the text: "{text}"',
        "",
        f"Sentiment: {result.sentiment.value} ({result.confidence * 100:.1f}% confidence)",
        "",
    ]
    key_terms = ", ".join(result.keywords[:3])

    if result.sentiment is Sentiment.POSITIVE:
        lines += [
            "🎉 Suggested responses:",
            "• 'Thank you so much for your wonderful feedback!'",
            "• 'We're thrilled to hear about your positive experience!'",
            "• 'Your kind words truly make our day!'",
        ]
        if key_terms:
            lines += ["", f"💡 Key terms to acknowledge: {key_terms}"]
    elif result.sentiment is Sentiment.NEGATIVE:
        lines += [
            "🤝 Suggested responses:",
            "• 'We sincerely apologize for your disappointing experience.'",
            "• 'Thank you for bringing this to our attention. We take this seriously.'",
            "• 'We'd like to make this right. Please let us know how we can help.'",
        ]
        if key_terms:
            lines += ["", f"⚠️ Address these concerns: {key_terms}"]
    else:
        lines += [
            "💬 Suggested responses:",
            "• 'Thank you for taking the time to share your feedback.'",
            "• 'We appreciate your input and will consider it carefully.'",
            "• 'Is there anything specific we can help you with?'",
        ]
    return "\n".join(lines)


def response_strategy(results: Sequence[SentimentResult]) -> str:
    positive = _count(results, Sentiment.POSITIVE)
    negative = _count(results, Sentiment.NEGATIVE)
    neutral = _count(results, Sentiment.NEUTRAL)

    parts = ["📊 Response Strategy Overview:\n"]
    if positive:
        parts.append(
            f"✅ {positive} Positive feedback(s):\n"
            "• Express gratitude and appreciation\n"
            "• Share the feedback with your team\n"
            "• Encourage continued engagement\n"
        )
    if negative:
        parts.append(
            f"❌ {negative} Negative feedback(s):\n"
            "• Acknowledge the issue promptly\n"
            "• Apologize sincerely and take responsibility\n"
            "• Offer concrete solutions or next steps\n"
        )
    if neutral:
        parts.append(
            f"➖ {neutral} Neutral feedback(s):\n"
            "• Thank them for their time\n"
            "• Ask clarifying questions if needed\n"
            "• Provide additional helpful information\n"
        )
    parts.append("💡 Pro tip: Always respond within 24 hours and personalize your responses!")
    return "\n".join(parts)


def summary_reply(results: Sequence[SentimentResult]) -> str:
    total = len(results)
    if not total:
        return "There are no analysis results yet. Analyze some texts first and ask me again!"

    positive = _count(results, Sentiment.POSITIVE)
    negative = _count(results, Sentiment.NEGATIVE)
    neutral = _count(results, Sentiment.NEUTRAL)
    average = sum(r.confidence for r in results) / total

    lines = [
        f"📈 Analysis Summary ({total} texts):",
        "",
        f"• Positive: {positive} ({positive / total * 100:.1f}%)",
        f"• Negative: {negative} ({negative / total * 100:.1f}%)",
        f"• Neutral: {neutral} ({neutral / total * 100:.1f}%)",
        f"• Average Confidence: {average * 100:.1f}%",
        "",
    ]
    if positive > negative:
        lines += [
            "🎉 Overall sentiment is positive! Focus on:",
            "• Thanking customers for positive feedback",
            "• Sharing success stories with your team",
        ]
    elif negative > positive:
        lines += [
            "⚠️ More negative feedback detected. Priority actions:",
            "• Address negative feedback immediately",
            "• Identify common issues and fix them",
        ]
    else:
        lines += [
            "⚖️ Mixed sentiment detected. Balanced approach:",
            "• Celebrate the positives",
            "• Address the negatives promptly",
        ]
    return "\n".join(lines)
