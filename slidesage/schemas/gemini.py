"""
Gemini Schemas

Pydantic schemas for the Google AI Studio generateContent request and response.
"""

from pydantic import BaseModel, Field


class GeminiPart(BaseModel):
    text: str = ""


class GeminiContent(BaseModel):
    parts: list[GeminiPart] = Field(default_factory=list)
    role: str | None = None


class GeminiRequest(BaseModel):
    """Request body of ``models/{model}:generateContent``."""

    contents: list[GeminiContent]

    @classmethod
    def from_prompt(cls, prompt: str) -> "GeminiRequest":
        """Single-turn request carrying one text part."""
        return cls(contents=[GeminiContent(parts=[GeminiPart(text=prompt)])])


class GeminiCandidate(BaseModel):
    content: GeminiContent | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")


class GeminiResponse(BaseModel):
    """Response body of ``generateContent``; only candidates are read."""

    candidates: list[GeminiCandidate] = Field(default_factory=list)

    def first_text(self) -> str | None:
        """Text of the first part of the first candidate, if any."""
        if not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None or not content.parts:
            return None
        return content.parts[0].text
