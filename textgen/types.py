from dataclasses import dataclass, field
from typing import List, Literal, Optional

OutcomeKind = Literal["text", "request", "error"]

# Fixed error strings returned to callers in place of generated text
JSON_PARSE_ERROR = "Invalid Json"
INVALID_PROTOCOL_ERROR = "Invalid Protocol, use https"
UNSUPPORTED_ENDPOINT_ERROR = "Unsupported Endpoint"
INVALID_PROMPT_ERROR = "Invalid Prompt, cannot be null or empty"
MSG_OVERRIDE_FORBIDDEN_ERROR = "Invalid override, 'messages' cannot be overriden"

CONTENT_TYPE_HEADER = "Content-Type: application/json"


@dataclass
class GenerationRequest:
    prompt: Optional[str]
    endpoint: str = ""           # empty -> configured default
    model: str = ""              # empty -> configured default
    credential_ref: str = ""     # empty -> default api key
    overrides: str = ""          # JSON object text, merged into the payload
    dry_run: bool = False


@dataclass
class PreparedRequest:
    """A fully built POST, ready for a transport."""

    endpoint: str
    payload: str
    headers: List[str] = field(default_factory=list)

    def header_dict(self) -> dict:
        """Headers as a name -> value mapping for HTTP clients."""
        result = {}
        for header in self.headers:
            name, _, value = header.partition(":")
            result[name.strip()] = value.strip()
        return result

    def serialize(self) -> str:
        """Endpoint, one header per line, then the payload."""
        return "\n".join([self.endpoint, *self.headers, self.payload])


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    value: str

    @classmethod
    def text(cls, value: str) -> "Outcome":
        return cls(kind="text", value=value)

    @classmethod
    def request(cls, value: str) -> "Outcome":
        return cls(kind="request", value=value)

    @classmethod
    def error(cls, value: str) -> "Outcome":
        return cls(kind="error", value=value)

    @property
    def is_error(self) -> bool:
        return self.kind == "error"

    def __str__(self) -> str:
        return self.value
