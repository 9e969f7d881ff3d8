"""Conversation domain: signals, dispatch state, outcomes and state storage."""
