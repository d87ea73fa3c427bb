"""Canned replies for the reporting assistant chat."""
from __future__ import annotations

from civictrack.classifier import classify_issue
from civictrack.classifier.remote import RemoteClassifier
from civictrack.errors import ClassificationError
from civictrack.model.classification import Classification, Urgency

ISSUE_KEYWORDS: tuple[str, ...] = (
    "pothole",
    "light",
    "water",
    "garbage",
    "electric",
    "drain",
    "safety",
    "broken",
    "damaged",
    "leak",
    "out",
    "not working",
)

MIN_ISSUE_LENGTH = 10

_URGENCY_NOTES = {
    Urgency.HIGH: "This appears to be a high-priority issue that needs immediate attention!",
    Urgency.MEDIUM: "This is a moderate priority issue.",
    Urgency.LOW: "This is a low priority issue but still important for community improvement.",
}

CLASSIFY_FAILED_REPLY = (
    "I had trouble classifying that issue. Could you provide more details "
    "about the problem you're experiencing?"
)

CATEGORIES_REPLY = """\
I can help classify your civic issue! Here are the categories we support:

**Road** - Potholes, road damage, traffic signs
**Streetlight** - Broken lights, dark areas
**Water Supply** - Leaks, no water, quality issues
**Sanitation** - Garbage, cleanliness, waste management
**Electricity** - Power outages, electrical hazards
**Drainage** - Blocked drains, flooding
**Public Safety** - Security concerns, safety hazards
**Other** - Any other civic concerns

Just describe your issue and I'll help categorize it and suggest improvements!"""

URGENCY_REPLY = """\
Issue urgency levels:

**High** - Immediate safety threats, major infrastructure failure
**Medium** - Significant inconvenience, moderate safety concerns
**Low** - Minor issues, aesthetic improvements

I can help determine the urgency of your civic issue!"""

HELP_REPLY = """\
I'm your CivicTrack assistant! I can help you:

- Classify civic issues into proper categories
- Enhance issue titles for clarity
- Determine urgency levels
- Navigate the platform
- Understand reporting process

Try asking: "How do I report a pothole?" or "Classify my streetlight issue\""""

GENERAL_REPLY = (
    "I can help you classify and enhance your civic issue reports. "
    "What type of issue would you like to report?"
)


def looks_like_issue(text: str) -> bool:
    """True when the message mentions an issue keyword and is long enough to classify."""
    lowered = text.lower()
    return len(text) > MIN_ISSUE_LENGTH and any(k in lowered for k in ISSUE_KEYWORDS)


def format_classification(classification: Classification) -> str:
    return (
        "**Issue Classification:**\n"
        "\n"
        f"**Category:** {classification.category}\n"
        f"**Suggested Title:** {classification.suggested_title}\n"
        f"**Summary:** {classification.summary}\n"
        f"**Tags:** {', '.join(classification.tags)}\n"
        f"**Urgency:** {classification.urgency}\n"
        "\n"
        f"{_URGENCY_NOTES[classification.urgency]}\n"
        "\n"
        "Would you like help reporting this issue through our platform?"
    )


def reply(text: str, classifier: RemoteClassifier | None = None) -> str:
    """Answer a chat message.

    Messages that describe an issue are classified, using the message as both
    title and description. Remote failures produce an apology rather than a
    silent switch to the keyword rules.
    """
    lowered = text.lower()
    if looks_like_issue(text):
        try:
            classification = classify_issue(text, text, remote=classifier)
        except ClassificationError:
            return CLASSIFY_FAILED_REPLY
        return format_classification(classification)
    if any(word in lowered for word in ("classify", "category", "report")):
        return CATEGORIES_REPLY
    if "urgent" in lowered or "priority" in lowered:
        return URGENCY_REPLY
    if "help" in lowered or "how" in lowered:
        return HELP_REPLY
    return GENERAL_REPLY
