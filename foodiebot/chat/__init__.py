"""
Conversational assistant layer.

Responsibilities:
- Render recommendations, location and menu into the assistant's context.
- Keep a bounded per-session conversation history.
- Dispatch chat turns to the configured AI proxy and record the replies.
"""
