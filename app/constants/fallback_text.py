"""Fixed texts returned when no external text generator is available."""


class FallbackReply:
    """Reply used when the chat generator cannot answer."""

    CHARACTER_PREFIX = "[Responding as {character}] "
    TEMPLATE = (
        "AI response to your question '{content}'. "
        "The external RAG server's /chat API would normally generate this reply."
    )


class FallbackSummary:
    """Ending-credit lines used when no summary could be generated."""

    NEW_CONVERSATION = [
        "A new conversation has begun",
        "We haven't shared many stories yet",
        "This was our very first meeting",
    ]

    # First line is formatted with the session's message count.
    LINES = [
        "Our conversation carried on across {message_count} messages",
        "From the very first question to the final answer",
        "It was a time of slowly getting to know each other",
        "Sometimes serious, sometimes playful",
        "Stories hidden between questions and answers",
        "A special moment where people and AI meet",
        "Warmth carried beyond the technology",
        "Real connection shared in a digital space",
        "May this conversation be a small comfort to someone",
        "Hoping we can meet again next time",
    ]


class DefaultCredits:
    """Cast list shown alongside the summary lines."""

    CAST = [
        {"role": "User", "name": "You"},
        {"role": "Assistant", "name": "Chat-Orchestra"},
    ]
