"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Forward assembled chat conversations to Groq for the platform proxy.
- Surface provider failures as ``LLMError`` so the proxy can report them.
"""
