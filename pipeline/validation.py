"""
Submission model — the one definition of a valid submission.

Used twice:
- As the request body of POST /api/analyze (api/schemas/analysis.py), so
  FastAPI rejects bad input with its own 422 before our code runs
- Inside AnalysisPipeline.submit(), so callers that don't go through HTTP
  (uploads, scripts, tests) get the same checks as a pydantic.ValidationError

A submission with any invalid field is rejected as a whole and no analysis
record is created. pydantic reports every bad field, not just the first.
"""

from pydantic import BaseModel, Field, field_validator

from models.enums import Language


class Submission(BaseModel):
    code: str = Field(
        ...,
        min_length=1,   # whitespace-only code is still code
        examples=["var x = 1;\nif (x == 1) { console.log(x); }"],
    )
    language: Language  # must be one of: javascript, python, solidity
    filename: str = Field(..., min_length=1, max_length=255, examples=["a.js"])

    @field_validator("filename")
    @classmethod
    def filename_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Filename is required")
        return value
