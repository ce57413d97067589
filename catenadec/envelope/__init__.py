"""Adapters between message-bus envelopes and raw payloads."""
