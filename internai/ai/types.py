from dataclasses import dataclass
from typing import Literal, Protocol, Sequence


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str


class AIClient(Protocol):
    def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str: ...


class AIServiceError(RuntimeError):
    def __init__(self, message: str, *, code: str = "ai_unavailable", status_code: int = 502):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class AIConfigurationError(AIServiceError):
    def __init__(self, message: str = "AI Service configuration error. Please set GROQ_API_KEY in .env"):
        super().__init__(message, code="ai_not_configured", status_code=500)


class AIResponseParseError(AIServiceError):
    def __init__(self, message: str):
        super().__init__(message, code="ai_invalid_json", status_code=500)
