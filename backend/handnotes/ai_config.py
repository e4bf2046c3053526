"""AI configuration and prompts for handnotes."""

from typing import Any, Dict

EXTRACT_TOOL_NAME = "extract_meeting_data"


class AIPrompts:
    """Collection of AI prompts used for note extraction."""

    SYSTEM = f"""You are a meeting notes organizer. You will receive an image of handwritten meeting notes. Your job is to:
1. Transcribe the handwritten text accurately
2. Organize it into formal meeting notes with sections like Date, Attendees, Discussion Points
3. Extract all action items/tasks

You MUST respond using the {EXTRACT_TOOL_NAME} tool."""

    USER_INSTRUCTION = (
        "Please transcribe and organize these handwritten meeting notes. "
        "Extract all tasks and action items."
    )


class AIConfig:
    """Tool schema and request shape for the extraction gateway."""

    EXTRACT_TOOL: Dict[str, Any] = {
        "type": "function",
        "function": {
            "name": EXTRACT_TOOL_NAME,
            "description": "Extract structured meeting notes and tasks from handwritten notes image",
            "parameters": {
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Meeting title or topic"},
                    "date": {
                        "type": "string",
                        "description": "Meeting date if mentioned, otherwise empty string",
                    },
                    "attendees": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of attendees if mentioned",
                    },
                    "summary": {
                        "type": "string",
                        "description": "Brief summary of the meeting in 1-2 sentences",
                    },
                    "notes": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Key discussion points as bullet points",
                    },
                    "tasks": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "text": {"type": "string", "description": "The task description"},
                                "assignee": {
                                    "type": "string",
                                    "description": "Person assigned if mentioned, otherwise empty",
                                },
                            },
                            "required": ["text", "assignee"],
                            "additionalProperties": False,
                        },
                        "description": "Extracted action items and tasks",
                    },
                },
                "required": ["title", "date", "attendees", "summary", "notes", "tasks"],
                "additionalProperties": False,
            },
        },
    }

    TOOL_CHOICE: Dict[str, Any] = {"type": "function", "function": {"name": EXTRACT_TOOL_NAME}}

    @staticmethod
    def build_messages(image_data: str) -> list[dict]:
        """System prompt plus one user turn carrying the instruction and the image."""
        return [
            {"role": "system", "content": AIPrompts.SYSTEM},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": AIPrompts.USER_INSTRUCTION},
                    {"type": "image_url", "image_url": {"url": image_data}},
                ],
            },
        ]
