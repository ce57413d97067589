"""Envelope adapter interfaces."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from catenadec.core.model import InboundPayload


class EnvelopeAdapter(Protocol):
    def extract(self, message: Mapping[str, Any]) -> InboundPayload:
        """Return the raw payload bytes and port carried by an inbound message."""

    def attach(
        self,
        message: Mapping[str, Any],
        decoded: dict[str, Any],
        metadata: Mapping[str, str],
    ) -> dict[str, Any]:
        """Return the outbound message carrying the decoded record."""
