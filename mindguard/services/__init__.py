"""MindGuard chat-core services.

Request flow:
- sentiment_service: scores the message once (caller-side)
- safety_service: classifies risk locally before any response strategy runs
- chat_service: routes to the remote generator or the local responder
- llm_service: remote generation with validation and deterministic fallback
- response_service: pattern library, guidance tables, personalization
"""
