"""
Purpose: Guardrails for chat input.
Content: early, predictable failures for empty or oversized messages.
Orders themselves are not validated here.
"""

MAX_INPUT_CHARS = 4000


class DefaultSecurity:
    def validate_user_input(self, text: str) -> None:
        if not (text or "").strip():
            raise ValueError("Please enter a non-empty message.")
        if len(text) > MAX_INPUT_CHARS:
            raise ValueError("Re-type your message.\nYour message is too long.")

    def sanitize_for_prompt(self, text: str) -> str:
        return (text or "").replace("\x00", "").strip()
