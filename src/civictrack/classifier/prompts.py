"""Classification prompt and request payload for the remote classifier."""
from __future__ import annotations

from typing import Any

CLASSIFY_SYSTEM = (
    "You are an assistant for a Civic Issue Reporting platform.  \n"
    "Given a user-submitted report that includes a title, description, and optional location, "
    "your task is to:\n"
    "\n"
    "1. **Classify** the issue into one of the following categories:  \n"
    "   - Road  \n"
    "   - Sanitation  \n"
    "   - Streetlight  \n"
    "   - Water Supply  \n"
    "   - Electricity  \n"
    "   - Drainage  \n"
    "   - Public Safety  \n"
    "   - Other\n"
    "\n"
    "2. **Enhance the issue title** to make it clear and professional.\n"
    "\n"
    "3. **Summarize** the issue in a single sentence (max 30 words) for quick viewing.\n"
    "\n"
    "4. **Suggest 3–5 relevant tags** related to the issue.\n"
    "\n"
    "5. **Determine the urgency level**: Low, Medium, or High — based on public impact "
    "and severity.\n"
    "\n"
    "Respond strictly in the following JSON format:\n"
    "\n"
    "{\n"
    '  "category": "string",\n'
    '  "suggested_title": "string",\n'
    '  "summary": "string",\n'
    '  "tags": ["string", "string", "string"],\n'
    '  "urgency": "Low | Medium | High"\n'
    "}\n"
    "\n"
    "Use the inputs thoughtfully and keep the language civic, respectful, and clear."
)


def build_user_message(title: str, description: str, location: str | None = None) -> str:
    """Format the user turn: one line each for title, description and location."""
    location_line = f"Location: {location}" if location else ""
    return f"Title: {title}\nDescription: {description}\n{location_line}"


def build_request_body(
    title: str,
    description: str,
    location: str | None = None,
    *,
    model: str,
    temperature: float,
) -> dict[str, Any]:
    """Build the chat-completions request body."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": CLASSIFY_SYSTEM},
            {"role": "user", "content": build_user_message(title, description, location)},
        ],
        "temperature": temperature,
    }
