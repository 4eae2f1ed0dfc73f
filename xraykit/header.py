"""Parsing and rendering of the X-Amzn-Trace-Id header value."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

ROOT_PREFIX = "Root="
PARENT_PREFIX = "Parent="
SAMPLED_PREFIX = "Sampled="
SELF_PREFIX = "Self="


class SamplingDecision(str, enum.Enum):
    """Whether the current segment has been sampled."""

    SAMPLED = "Sampled=1"
    NOT_SAMPLED = "Sampled=0"
    REQUESTED = "Sampled=?"
    UNKNOWN = ""

    @classmethod
    def parse(cls, text: str) -> "SamplingDecision":
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class Header:
    """The components of an X-Amzn-Trace-Id value."""

    trace_id: str = ""
    parent_id: str = ""
    sampling_decision: SamplingDecision = SamplingDecision.UNKNOWN
    additional_data: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        parts: list[str] = []
        if self.trace_id:
            parts.append(ROOT_PREFIX + self.trace_id)
        if self.parent_id:
            parts.append(PARENT_PREFIX + self.parent_id)
        parts.append(self.sampling_decision.value)
        parts.extend(f"{key}={value}" for key, value in self.additional_data.items())
        return ";".join(parts)


def from_string(text: str) -> Header:
    """Parse a header value into a :class:`Header`."""
    result = Header()
    for raw in text.split(";"):
        part = raw.strip()
        key, sep, value = part.partition("=")
        if not sep:
            continue
        if part.startswith(ROOT_PREFIX):
            result.trace_id = value
        elif part.startswith(PARENT_PREFIX):
            result.parent_id = value
        elif part.startswith(SAMPLED_PREFIX):
            result.sampling_decision = SamplingDecision.parse(part)
        elif not part.startswith(SELF_PREFIX):
            result.additional_data[key] = value
    return result